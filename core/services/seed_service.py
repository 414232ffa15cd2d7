# =============================================================================
# core/services/seed_service.py - Catalog Seeding
# =============================================================================
# Populates the catalog with the starter quotes and books from
# core/seed_data.py. Items already present (same quote text / same book
# title) are skipped, so seeding is safe to run repeatedly.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any

from app.config import settings
from app.exceptions import PersistenceError
from core.models.catalog import CatalogRecord, EntityKind
from core.seed_data import SEED_BOOKS, SEED_QUOTES
from core.services.catalog_service import CatalogService
from lib.row_store import RowStore, RowStoreError

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_CATEGORY = "Inspiração"
DEFAULT_AUTHOR_ROLE = "Autor"
DEFAULT_BOOK_CATEGORY = "Desenvolvimento"


@dataclass
class SeedResult:
    """How many seed items were newly inserted."""
    added_quotes: int = 0
    added_books: int = 0

    @property
    def total(self) -> int:
        return self.added_quotes + self.added_books

    @property
    def message(self) -> str:
        if self.total == 0:
            return "No new items added (all seed items already exist)."
        return f"Added {self.added_quotes} quotes and {self.added_books} books."


def _already_present(store: RowStore, table: str, column: str, value: str) -> bool | None:
    """
    True/False for presence, None when the lookup itself failed.

    Callers skip the item on None: a failed lookup never leads to an insert.
    """
    try:
        rows = store.query(table, columns="id", filters={column: value}, limit=1)
    except RowStoreError as e:
        logger.warning(f"Seed lookup failed on {table}.{column}: {e.message}")
        return None
    return bool(rows)


def _seed_items(
    service: CatalogService,
    items: list[dict[str, Any]],
    key_field: str,
    defaults: dict[str, Any],
) -> int:
    """Insert every item whose key isn't in the table yet. Returns the count."""
    config = service.config
    key_column = config.columns[key_field]
    added = 0

    for item in items:
        key = item[key_field]
        present = _already_present(service.store, config.table, key_column, key)
        if present is None or present:
            continue

        record: CatalogRecord = config.model.model_validate({**defaults, **item})
        try:
            service.save_record(record)
            added += 1
        except PersistenceError as e:
            logger.warning(f"Skipped seed item '{key}': {e.message}")

    return added


def seed_database(store: RowStore) -> SeedResult:
    """
    Insert the starter quotes and books that are missing.

    Args:
        store: Row store to seed

    Returns:
        SeedResult with per-kind insert counts
    """
    quotes = CatalogService(store, EntityKind.QUOTES)
    books = CatalogService(store, EntityKind.BOOKS)

    result = SeedResult(
        added_quotes=_seed_items(
            quotes,
            SEED_QUOTES,
            key_field="quote",
            defaults={
                "category": DEFAULT_QUOTE_CATEGORY,
                "authorRole": DEFAULT_AUTHOR_ROLE,
                "socialHandle": settings.DEFAULT_SOCIAL_HANDLE,
                "websiteUrl": settings.DEFAULT_WEBSITE_URL,
            },
        ),
        added_books=_seed_items(
            books,
            SEED_BOOKS,
            key_field="bookTitle",
            defaults={
                "category": DEFAULT_BOOK_CATEGORY,
                "socialHandle": settings.DEFAULT_SOCIAL_HANDLE,
            },
        ),
    )

    logger.info(f"Seeding finished: {result.message}")
    return result
