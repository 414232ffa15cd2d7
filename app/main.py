# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Catalog Admin API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import CatalogAdminException, catalog_exception_handler
from app.routers import admin, health, records

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs startup configuration and shutdown.
    """
    logger.info(f"Starting Catalog Admin API in {settings.ENVIRONMENT} mode")
    logger.info(f"Storage bucket: {settings.STORAGE_BUCKET}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Catalog Admin API")


# Create FastAPI application
app = FastAPI(
    title="Catalog Admin API",
    description="""
## Content Catalog Admin API

Data access for the quote, book and job cards: list, edit, upload images,
pick a random card and stamp downloads.

### Record Kinds

| Kind | Image field | Upload folder |
|------|-------------|---------------|
| **quotes** | authorImage | authors/ |
| **books** | coverImage | books/ |
| **jobs** | imageUrl | jobs/ |

### Quick Start

```bash
# List quotes
curl http://localhost:8000/api/v1/records/quotes

# Create a quote with a photo
curl -X POST http://localhost:8000/api/v1/records/quotes \\
  -F 'record={"quote": "Test", "authorName": "A", "category": "Motivação"}' \\
  -F "image=@photo.png"

# Random book in a category
curl "http://localhost:8000/api/v1/records/books/random?category=Liderança"
```
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Records",
            "description": "Quote, book and job CRUD",
        },
        {
            "name": "Admin",
            "description": "Catalog maintenance",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CatalogAdminException)
async def handle_catalog_exception(request: Request, exc: CatalogAdminException):
    """Handle custom catalog exceptions."""
    return await catalog_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Catalog record endpoints
app.include_router(
    records.router,
    prefix="/api/v1/records",
    tags=["Records"]
)

# Maintenance endpoints
app.include_router(
    admin.router,
    prefix="/api/v1/admin",
    tags=["Admin"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Catalog Admin API",
        "version": health.VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
