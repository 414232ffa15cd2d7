# =============================================================================
# core/admin_console.py - Admin Console State
# =============================================================================
# Framework-agnostic state and workflow behind the operator console:
# - three tabs (quotes, books, jobs), each a full-table list
# - in-memory search over a few text fields per kind
# - one edit session at a time with a staged (not yet uploaded) image
# - delete behind an explicit confirmation step
#
# Front-ends (scripts/admin_console.py) render this state and call its
# methods; they never talk to the store themselves.
#
# Usage:
#   console = AdminConsole(store)
#   console.switch_tab(EntityKind.BOOKS)
#   console.set_search("sinek")
#   console.open_editor(console.visible_items[0])
#   console.update_field("review", "Leitura obrigatória")
#   console.save()
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.config import settings
from app.exceptions import PersistenceError
from core.models.catalog import (
    CatalogRecord,
    EntityConfig,
    EntityKind,
    StagedImage,
    get_entity_config,
)
from core.services.catalog_service import CatalogService
from lib.row_store import RowStore

logger = logging.getLogger(__name__)


def matches_search(record: CatalogRecord, config: EntityConfig, term: str) -> bool:
    """
    Case-insensitive substring match against the kind's search fields.

    An empty term matches everything.
    """
    needle = term.strip().lower()
    if not needle:
        return True
    return any(
        needle in (getattr(record, field_name) or "").lower()
        for field_name in config.search_fields
    )


@dataclass
class EditSession:
    """
    The record currently open in the editor.

    `form` is a shallow copy of the selected record, so edits never touch
    the listed item until a save succeeds and the list is re-fetched.
    """
    form: CatalogRecord
    staged_image: StagedImage | None = None
    is_saving: bool = False
    error: str | None = None

    @property
    def is_new(self) -> bool:
        return self.form.id is None


class AdminConsole:
    """
    Operator workflow over whichever catalog tab is active.

    Single operator, single session: no locking. Store failures on save
    stay on the edit session for retry; delete failures land in
    `last_error` and leave the list untouched.
    """

    def __init__(self, store: RowStore, kind: EntityKind | str = EntityKind.QUOTES):
        self.store = store
        self.services = {k: CatalogService(store, k) for k in EntityKind}
        self.active_tab = EntityKind(kind)
        self.search_term = ""
        self.items: list[CatalogRecord] = []
        self.editor: EditSession | None = None
        self.pending_delete_id: str | None = None
        self.last_error: str | None = None

    # -------------------------------------------------------------------------
    # Tabs & Listing
    # -------------------------------------------------------------------------

    @property
    def service(self) -> CatalogService:
        return self.services[self.active_tab]

    @property
    def config(self) -> EntityConfig:
        return get_entity_config(self.active_tab)

    def refresh(self) -> list[CatalogRecord]:
        """Re-fetch the whole active table."""
        self.items = self.service.list_records()
        logger.debug(f"Loaded {len(self.items)} {self.active_tab.value}")
        return self.items

    def switch_tab(self, kind: EntityKind | str) -> list[CatalogRecord]:
        """Activate a tab: clears search, closes any editor, re-lists."""
        self.active_tab = EntityKind(kind)
        self.search_term = ""
        self.editor = None
        self.pending_delete_id = None
        return self.refresh()

    def set_search(self, term: str) -> None:
        self.search_term = term

    @property
    def visible_items(self) -> list[CatalogRecord]:
        """Fetched items filtered by the current search term."""
        return [
            item for item in self.items
            if matches_search(item, self.config, self.search_term)
        ]

    def find_item(self, record_id: str) -> CatalogRecord | None:
        return next((item for item in self.items if item.id == record_id), None)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def open_editor(self, record: CatalogRecord) -> EditSession:
        """Start editing a listed record."""
        self.editor = EditSession(form=record.model_copy())
        return self.editor

    def open_new(self) -> EditSession:
        """Start editing a blank record of the active kind."""
        defaults: dict[str, Any] = {}
        fields = self.config.model.model_fields
        if "social_handle" in fields:
            defaults["social_handle"] = settings.DEFAULT_SOCIAL_HANDLE
        if "website_url" in fields:
            defaults["website_url"] = settings.DEFAULT_WEBSITE_URL
        if self.config.categories:
            defaults[self.config.category_field] = self.config.categories[0]

        self.editor = EditSession(form=self.config.model(**defaults))
        return self.editor

    def _require_editor(self) -> EditSession:
        if self.editor is None:
            raise RuntimeError("No record is open in the editor")
        return self.editor

    def update_field(self, name: str, value: Any) -> CatalogRecord:
        """
        Set one form field by attribute name or camelCase alias.

        Raises:
            ValueError: If the kind has no such field
        """
        editor = self._require_editor()
        model = type(editor.form)

        alias = next(
            (
                info.alias or field_name
                for field_name, info in model.model_fields.items()
                if name in (field_name, info.alias)
            ),
            None,
        )
        if alias is None or alias in ("id", "lastDownloaded"):
            raise ValueError(f"{self.config.label} have no editable field '{name}'")

        data = editor.form.model_dump(by_alias=True)
        data[alias] = value
        editor.form = model.model_validate(data)
        return editor.form

    def stage_image(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Stage an image for upload on the next save.

        Returns:
            A local preview URL (data: URI) for display only
        """
        editor = self._require_editor()
        editor.staged_image = StagedImage(
            filename=filename,
            content=content,
            content_type=content_type,
        )
        return editor.staged_image.preview_url

    def preview_image_url(self) -> str:
        """What the editor should show: staged preview, else the saved URL."""
        editor = self._require_editor()
        if editor.staged_image is not None:
            return editor.staged_image.preview_url
        return getattr(editor.form, self.config.image_field)

    def save(self) -> CatalogRecord | None:
        """
        Persist the open form (uploading the staged image first).

        On success the list is re-fetched and the editor closes. On failure
        the store's message is kept on the editor, which stays open.

        Returns:
            The saved record, or None if the save failed or was refused
        """
        editor = self._require_editor()
        if editor.is_saving:
            logger.warning("Save already in progress, ignoring duplicate submit")
            return None

        editor.is_saving = True
        editor.error = None
        try:
            saved = self.service.save_record(editor.form, editor.staged_image)
        except PersistenceError as e:
            logger.error(f"Save failed: {e.message}")
            editor.error = e.message
            return None
        finally:
            editor.is_saving = False

        self.refresh()
        self.editor = None
        return saved

    def close_editor(self) -> None:
        self.editor = None

    # -------------------------------------------------------------------------
    # Deleting
    # -------------------------------------------------------------------------

    def request_delete(self, record_id: str) -> None:
        """First step of a delete; nothing happens until confirm_delete()."""
        self.pending_delete_id = record_id

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        """
        Delete the pending record.

        The row leaves the local list only once the store confirms.

        Returns:
            True if the record was deleted
        """
        record_id = self.pending_delete_id
        if record_id is None:
            return False
        self.pending_delete_id = None

        try:
            self.service.delete_record(record_id)
        except PersistenceError as e:
            logger.error(f"Delete failed for {record_id}: {e.message}")
            self.last_error = e.message
            return False

        self.last_error = None
        self.items = [item for item in self.items if item.id != record_id]
        return True

    # -------------------------------------------------------------------------
    # Extras
    # -------------------------------------------------------------------------

    def pick_random(self, category: str | None = None) -> CatalogRecord | None:
        return self.service.pick_random(category)
