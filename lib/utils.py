# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
import unicodedata
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

DEFAULT_IMAGE_EXTENSION = "jpg"
FALLBACK_IMAGE_STEM = "image"


# =============================================================================
# ID Utilities
# =============================================================================

def normalize_id(value: str | int | UUID) -> str:
    """
    Normalize a record ID to string format.

    The row store may hand back UUIDs or integer keys depending on the
    table definition; records always carry them as strings.

    Example:
        record_id = normalize_id(uuid_obj)  # "550e8400-..."
        record_id = normalize_id(42)        # "42"
    """
    return value if isinstance(value, str) else str(value)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# Filename Utilities
# =============================================================================

def sanitize_filename(name: str) -> str:
    """
    Make a filename safe to use as an object storage key.

    Steps:
    1. Unicode canonical decomposition, then drop combining marks (accents)
    2. Whitespace runs become a single hyphen
    3. Anything outside [a-zA-Z0-9._-] is dropped
    4. Lowercase

    Example:
        sanitize_filename("Relatório Final (2024)")  # "relatorio-final-2024"
    """
    decomposed = unicodedata.normalize("NFD", name)
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    hyphenated = re.sub(r"\s+", "-", without_marks)
    safe = re.sub(r"[^a-zA-Z0-9._-]", "", hyphenated)
    return safe.lower()


def split_filename(filename: str) -> tuple[str, str]:
    """
    Split an uploaded filename into (sanitized stem, lowercase extension).

    The stem is everything before the first dot and the extension is
    everything after the last one, so "my.photo.PNG" gives ("my", "png").
    Files without a dot get the default "jpg" extension.

    Example:
        split_filename("Relatório Final (2024).PNG")
        # ("relatorio-final-2024", "png")
    """
    if "." in filename:
        raw_stem = filename.split(".")[0]
        extension = filename.rsplit(".", 1)[1].lower() or DEFAULT_IMAGE_EXTENSION
    else:
        raw_stem = filename
        extension = DEFAULT_IMAGE_EXTENSION

    stem = sanitize_filename(raw_stem) or FALLBACK_IMAGE_STEM
    return stem, extension


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for library-level errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
