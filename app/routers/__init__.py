# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - records.py: Quote/book/job CRUD, random pick, download stamping
# - admin.py: Catalog maintenance (seeding)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import admin
from . import health
from . import records

__all__ = [
    "admin",
    "health",
    "records",
]
