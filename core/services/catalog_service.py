# =============================================================================
# core/services/catalog_service.py - Catalog Record CRUD
# =============================================================================
# The Data Access Layer for quotes, books and jobs. One CatalogService
# instance serves one record kind; everything kind-specific (table, column
# names, image field, upload folder) comes from its EntityConfig.
#
# Error policy:
# - list_records / pick_random absorb store failures (logged, empty result)
# - get_record raises FetchError
# - save_record / delete_record / mark_downloaded raise PersistenceError
#   (UploadError for image failures, which abort before any row write)
# =============================================================================

import logging
import math
import random
from datetime import datetime
from typing import Any

from app.config import settings
from app.exceptions import FetchError, PersistenceError, RecordNotFoundError
from core.models.catalog import CatalogRecord, EntityKind, StagedImage, get_entity_config
from core.services.storage_service import ImageStorageService
from lib.row_store import RowStore, RowStoreError
from lib.utils import utc_now

logger = logging.getLogger(__name__)


def _to_number(value: Any) -> float:
    """Coerce a stored offset to a number; anything unparseable is 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


class CatalogService:
    """
    CRUD for one catalog record kind over an injected RowStore.

    Example:
        service = CatalogService(store, EntityKind.QUOTES)
        quotes = service.list_records()
        saved = service.save_record(QuoteRecord(quote="Test", author_name="A"))
        service.mark_downloaded(saved.id)
    """

    def __init__(
        self,
        store: RowStore,
        kind: EntityKind | str,
        storage: ImageStorageService | None = None,
        sample_limit: int | None = None,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.config = get_entity_config(kind)
        self.storage = storage or ImageStorageService(store)
        self.sample_limit = sample_limit or settings.RANDOM_SAMPLE_LIMIT
        self._rng = rng or random.Random()

    @property
    def table(self) -> str:
        return self.config.table

    # -------------------------------------------------------------------------
    # Row <-> Record Mapping
    # -------------------------------------------------------------------------

    def record_from_row(self, row: dict[str, Any]) -> CatalogRecord:
        """
        Shape a store row into this kind's record model.

        Null text columns become empty strings; the split offset columns
        are folded back into one {x, y} value.
        """
        config = self.config
        data: dict[str, Any] = {
            field_name: row.get(column) or ""
            for field_name, column in config.columns.items()
        }

        if config.offset_field and config.offset_columns:
            x_column, y_column = config.offset_columns
            data[config.offset_field] = {
                "x": _to_number(row.get(x_column)),
                "y": _to_number(row.get(y_column)),
            }

        data["id"] = row.get("id")
        data["lastDownloaded"] = row.get("last_downloaded")
        return config.model.model_validate(data)

    def build_payload(self, record: CatalogRecord, image_url: str) -> dict[str, Any]:
        """
        Build the write payload for a save.

        Never includes id or last_downloaded: the first is the filter key,
        the second belongs to mark_downloaded().
        """
        config = self.config
        data = record.model_dump(by_alias=True)

        payload = {
            column: data.get(field_name)
            for field_name, column in config.columns.items()
        }
        payload[config.image_column] = image_url

        if config.offset_field and config.offset_columns:
            x_column, y_column = config.offset_columns
            offset = data.get(config.offset_field) or {}
            payload[x_column] = offset.get("x") or 0
            payload[y_column] = offset.get("y") or 0

        return payload

    def _merge_saved(
        self,
        record: CatalogRecord,
        row: dict[str, Any],
        image_url: str,
    ) -> CatalogRecord:
        """Overlay store-assigned values onto the submitted record."""
        config = self.config
        stored = self.record_from_row(row)

        updates: dict[str, Any] = {
            "id": stored.id or record.id,
            config.image_field: getattr(stored, config.image_field) or image_url,
        }
        for field_name in config.echo_fields:
            updates[field_name] = getattr(stored, field_name)

        return record.model_copy(update=updates)

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def list_records(self) -> list[CatalogRecord]:
        """
        Fetch every record, newest first.

        A store failure is logged and yields an empty list, so callers see
        the same result for "empty table" and "query failed".
        """
        try:
            rows = self.store.query(
                self.table,
                order_by="created_at",
                descending=True,
            )
        except RowStoreError as e:
            logger.error(FetchError(self.table, e.message).message)
            return []

        return [self.record_from_row(row) for row in rows]

    def get_record(self, record_id: str) -> CatalogRecord:
        """
        Fetch a single record by ID.

        Raises:
            RecordNotFoundError: If no row has this ID
            FetchError: If the query fails
        """
        try:
            rows = self.store.query(self.table, filters={"id": record_id}, limit=1)
        except RowStoreError as e:
            raise FetchError(self.table, e.message)

        if not rows:
            raise RecordNotFoundError(self.table, record_id)
        return self.record_from_row(rows[0])

    def pick_random(self, category: str | None = None) -> CatalogRecord | None:
        """
        Pick a random record, optionally within one category.

        Draws from at most `sample_limit` rows, so on larger tables this is
        not a uniform sample of the whole table.

        Returns:
            A record, or None when nothing matches or the query fails
        """
        filters = {self.config.category_column: category} if category else None

        try:
            rows = self.store.query(self.table, filters=filters, limit=self.sample_limit)
        except RowStoreError as e:
            logger.error(FetchError(self.table, e.message).message)
            return None

        if not rows:
            return None
        return self.record_from_row(self._rng.choice(rows))

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def save_record(
        self,
        record: CatalogRecord,
        image: StagedImage | None = None,
    ) -> CatalogRecord:
        """
        Insert or update a record, uploading a new image first if given.

        Args:
            record: The edited record (no id means insert)
            image: Newly picked image, or None to keep the current URL

        Returns:
            The record merged with store-assigned id, image URL and caption

        Raises:
            UploadError: If the image upload fails (nothing is written)
            RecordNotFoundError: If updating an id that matches no row
            PersistenceError: If the row write fails
        """
        config = self.config
        image_url = getattr(record, config.image_field)

        if image is not None:
            image_url = self.storage.upload_image(config.upload_folder, image)

        payload = self.build_payload(record, image_url)

        try:
            if record.id:
                rows = self.store.update(self.table, payload, filters={"id": record.id})
                if not rows:
                    raise RecordNotFoundError(self.table, record.id)
                if len(rows) != 1:
                    raise PersistenceError(
                        f"Update of {self.table} id {record.id} affected {len(rows)} rows",
                        details={"table": self.table, "id": record.id},
                    )
                row = rows[0]
                logger.info(f"Updated {self.table} row: {record.id}")
            else:
                row = self.store.insert(self.table, payload)
                logger.info(f"Inserted {self.table} row: {row.get('id')}")

        except RowStoreError as e:
            logger.error(f"Failed to save {self.table} row: {e.message}")
            raise PersistenceError(e.message, details={"table": self.table})

        return self._merge_saved(record, row, image_url)

    def delete_record(self, record_id: str) -> None:
        """
        Delete a record by ID. Deleting an unknown ID is not an error.

        Raises:
            PersistenceError: If the store rejects the delete
        """
        try:
            self.store.delete(self.table, filters={"id": record_id})
        except RowStoreError as e:
            logger.error(f"Failed to delete {self.table} row {record_id}: {e.message}")
            raise PersistenceError(e.message, details={"table": self.table, "id": record_id})

        logger.info(f"Deleted {self.table} row: {record_id}")

    def mark_downloaded(self, record_id: str) -> datetime:
        """
        Stamp a record's last_downloaded with the current UTC time.

        Returns:
            The timestamp that was written

        Raises:
            PersistenceError: If the update fails
        """
        downloaded_at = utc_now()

        try:
            self.store.update(
                self.table,
                {"last_downloaded": downloaded_at.isoformat()},
                filters={"id": record_id},
            )
        except RowStoreError as e:
            logger.error(f"Failed to mark {self.table} row {record_id} downloaded: {e.message}")
            raise PersistenceError(e.message, details={"table": self.table, "id": record_id})

        logger.debug(f"Marked {self.table} row {record_id} downloaded at {downloaded_at.isoformat()}")
        return downloaded_at
