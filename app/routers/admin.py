# =============================================================================
# app/routers/admin.py - Catalog Maintenance Endpoints
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.dependencies import RowStoreDep
from core.services.seed_service import seed_database

router = APIRouter()


class SeedResponse(BaseModel):
    """Outcome of a seeding run."""
    added_quotes: int = Field(..., serialization_alias="addedQuotes", examples=[6])
    added_books: int = Field(..., serialization_alias="addedBooks", examples=[4])
    message: str = Field(..., examples=["Added 6 quotes and 4 books."])


@router.post("/seed", response_model=SeedResponse)
async def seed(store: RowStoreDep):
    """
    Insert the starter quotes and books that aren't in the catalog yet.

    Safe to call repeatedly; existing items are skipped.
    """
    result = seed_database(store)
    return SeedResponse(
        added_quotes=result.added_quotes,
        added_books=result.added_books,
        message=result.message,
    )
