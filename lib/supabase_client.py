# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the connection to the hosted backend:
# - SupabaseClient: singleton holder for the supabase-py client
# - SupabaseRowStore: RowStore implementation over tables + storage bucket
#
# Services never touch the supabase client directly; they receive a
# RowStore (see lib/row_store.py) so tests can swap in a fake.
#
# Usage:
#   from lib.supabase_client import SupabaseClient, SupabaseRowStore
#   store = SupabaseRowStore(SupabaseClient.get_client(), bucket="images")
#   rows = store.query("quotes", order_by="created_at", descending=True)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.row_store import DEFAULT_CACHE_CONTROL, RowStoreError

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(RowStoreError):
    """
    Error during Supabase operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Holder for the shared Supabase client.

    Implements singleton pattern - one client instance is shared across
    the application.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (next get_client() reconnects)."""
        cls._instance = None


class SupabaseRowStore:
    """
    RowStore backed by Supabase tables (PostgREST) and one storage bucket.

    Example:
        store = SupabaseRowStore(SupabaseClient.get_client(), bucket="images")
        row = store.insert("books", {"book_title": "Mindset"})
        store.delete("books", filters={"id": row["id"]})
    """

    def __init__(self, client: Client, bucket: str):
        self._client = client
        self._bucket = bucket

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

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
        try:
            query = self._client.table(table).select(columns)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit is not None:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="QUERY_FAILED",
                suggestion=f"Check that the {table} table exists and is readable",
                details={"table": table, "filters": filters or {}},
            )

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.table(table).insert(row).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="INSERT_FAILED",
                details={"table": table},
            )

        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message="Insert returned no data",
            code="INSERT_NO_DATA",
            details={"table": table},
        )

    def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        try:
            query = self._client.table(table).update(values)
            for column, value in filters.items():
                query = query.eq(column, value)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="UPDATE_FAILED",
                details={"table": table, "filters": filters},
            )

    def delete(self, table: str, *, filters: dict[str, Any]) -> None:
        try:
            query = self._client.table(table).delete()
            for column, value in filters.items():
                query = query.eq(column, value)
            query.execute()

        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="DELETE_FAILED",
                details={"table": table, "filters": filters},
            )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def upload(
        self,
        path: str,
        content: bytes,
        *,
        content_type: str | None = None,
        cache_control: str = DEFAULT_CACHE_CONTROL,
        upsert: bool = True,
    ) -> None:
        file_options = {
            "cache-control": cache_control,
            "upsert": "true" if upsert else "false",
        }
        if content_type:
            file_options["content-type"] = content_type

        try:
            self._client.storage.from_(self._bucket).upload(
                path=path,
                file=content,
                file_options=file_options,
            )
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="UPLOAD_FAILED",
                suggestion=f"Check that the '{self._bucket}' bucket exists and allows uploads",
                details={"bucket": self._bucket, "path": path},
            )

    def get_public_url(self, path: str) -> str:
        try:
            return self._client.storage.from_(self._bucket).get_public_url(path)
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="PUBLIC_URL_FAILED",
                details={"bucket": self._bucket, "path": path},
            )
