# =============================================================================
# lib/row_store.py - Row Store Interface
# =============================================================================
# The Data Access Layer talks to the hosted backend only through this
# interface. It covers the handful of calls the catalog needs:
# - query: select columns with equality filters, ordering and a limit
# - insert / update / delete: single-table writes returning rows
# - upload / get_public_url: the object storage surface for images
#
# The production implementation is SupabaseRowStore (lib/supabase_client.py).
# Tests substitute an in-memory fake.
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol

from lib.utils import ApplicationError

DEFAULT_CACHE_CONTROL = "3600"


class RowStoreError(ApplicationError):
    """
    A call to the row store or object storage failed.

    The message carries the backend's own error text so it can be shown
    to the operator verbatim.
    """

    def __init__(
        self,
        message: str,
        code: str = "ROW_STORE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class RowStore(Protocol):
    """
    Generic remote row store plus object storage.

    All methods raise RowStoreError on failure.
    """

    def query(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows matching all equality filters."""
        ...

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored (with generated columns)."""
        ...

    def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Update rows matching the filters and return the updated rows."""
        ...

    def delete(self, table: str, *, filters: dict[str, Any]) -> None:
        """Delete rows matching the filters. Matching nothing is not an error."""
        ...

    def upload(
        self,
        path: str,
        content: bytes,
        *,
        content_type: str | None = None,
        cache_control: str = DEFAULT_CACHE_CONTROL,
        upsert: bool = True,
    ) -> None:
        """Store an object at path, overwriting it when upsert is set."""
        ...

    def get_public_url(self, path: str) -> str:
        """Resolve the stable public URL of a stored object."""
        ...
