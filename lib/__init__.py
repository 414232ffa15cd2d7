# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - row_store.py: RowStore interface the Data Access Layer depends on
# - supabase_client.py: Supabase client singleton and RowStore adapter
# - utils.py: Shared utilities (error base class, filename sanitizing)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.row_store import RowStore, RowStoreError
from lib.supabase_client import SupabaseClient, SupabaseClientError, SupabaseRowStore
from lib.utils import (
    ApplicationError,
    normalize_id,
    sanitize_filename,
    split_filename,
    utc_now,
)

__all__ = [
    # Row store
    "RowStore",
    "RowStoreError",
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "SupabaseRowStore",
    # Utils
    "ApplicationError",
    "normalize_id",
    "sanitize_filename",
    "split_filename",
    "utc_now",
]
