# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .catalog_service import CatalogService
from .seed_service import SeedResult, seed_database
from .storage_service import ImageStorageService, build_image_path

__all__ = [
    "CatalogService",
    "ImageStorageService",
    "SeedResult",
    "build_image_path",
    "seed_database",
]
