# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for the catalog records
# - services/: Data Access Layer (catalog CRUD, image storage, seeding)
# - admin_console.py: Operator console state and workflow
# - seed_data.py: Starter quotes and books
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
