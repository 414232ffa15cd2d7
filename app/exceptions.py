# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the catalog.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
#
# Propagation policy:
# - Read failures (FetchError) are absorbed by list/random reads and only
#   raised from single-record lookups.
# - Write failures (PersistenceError and subclasses) always propagate and
#   carry the backend's message so it can be shown verbatim.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class CatalogAdminException(Exception):
    """
    Base exception for the catalog admin.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ADMIN_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Read Exceptions
# =============================================================================

class FetchError(CatalogAdminException):
    """Raised when reading rows from the store fails."""

    def __init__(self, table: str, error: str):
        super().__init__(
            message=f"Failed to fetch from {table}: {error}",
            code="FETCH_ERROR",
            status_code=502,
            suggestion="Check the Supabase project status and try again",
            details={"table": table, "error": error}
        )


# =============================================================================
# Write Exceptions
# =============================================================================

class PersistenceError(CatalogAdminException):
    """
    Raised when a row write fails.

    The message is the store's own error text.
    """

    def __init__(
        self,
        message: str,
        code: str = "PERSISTENCE_ERROR",
        status_code: int = 502,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            suggestion=suggestion,
            details=details,
        )


class UploadError(PersistenceError):
    """Raised when an image upload to storage fails. No row is written."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to upload image: {error}",
            code="STORAGE_UPLOAD_ERROR",
            suggestion="Check the image file and the storage bucket, then save again",
            details={"path": path, "error": error}
        )


class RecordNotFoundError(PersistenceError):
    """Raised when a record ID doesn't match any row."""

    def __init__(self, table: str, record_id: str):
        super().__init__(
            message=f"No row in {table} with id {record_id}",
            code="RECORD_NOT_FOUND",
            status_code=404,
            suggestion="Refresh the list; the record may have been deleted",
            details={"table": table, "id": record_id}
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidRecordError(CatalogAdminException):
    """Raised when the submitted record payload can't be parsed."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Invalid record payload: {error}",
            code="INVALID_RECORD",
            status_code=422,
            suggestion="Send the record as a JSON object using camelCase field names",
            details={"error": error}
        )


class InvalidFileTypeError(CatalogAdminException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(CatalogAdminException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogAdminException
) -> JSONResponse:
    """
    Convert CatalogAdminException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
