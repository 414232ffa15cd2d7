# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the catalog record schemas:
# - catalog.py: Quote/Book/Job records, staged images and the per-kind
#   configuration table driving the generic pipeline
#
# These models define the "contract" between API and clients.
# =============================================================================

from .catalog import (
    BOOK_CATEGORIES,
    ENTITY_CONFIGS,
    QUOTE_CATEGORIES,
    BookRecord,
    CatalogRecord,
    EntityConfig,
    EntityKind,
    ImageOffset,
    JobRecord,
    QuoteRecord,
    StagedImage,
    get_entity_config,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    "BOOK_CATEGORIES",
    "ENTITY_CONFIGS",
    "QUOTE_CATEGORIES",
    "BookRecord",
    "CatalogRecord",
    "EntityConfig",
    "EntityKind",
    "ImageOffset",
    "JobRecord",
    "QuoteRecord",
    "StagedImage",
    "get_entity_config",
]
