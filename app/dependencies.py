# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests override get_row_store via app.dependency_overrides to run the
# routes against an in-memory store.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Path

from app.config import settings
from core.models.catalog import EntityKind
from core.services.catalog_service import CatalogService
from lib.row_store import RowStore
from lib.supabase_client import SupabaseClient, SupabaseRowStore


def get_row_store() -> RowStore:
    """
    Get the row store backed by the shared Supabase client.
    """
    return SupabaseRowStore(SupabaseClient.get_client(), bucket=settings.STORAGE_BUCKET)


# Type alias for dependency injection
RowStoreDep = Annotated[RowStore, Depends(get_row_store)]


def get_catalog_service(
    kind: Annotated[EntityKind, Path(description="Record kind: quotes, books or jobs")],
    store: RowStoreDep,
) -> CatalogService:
    """
    Get the CatalogService for the kind named in the URL path.
    """
    return CatalogService(store, kind)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
