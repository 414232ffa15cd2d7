# =============================================================================
# core/services/storage_service.py - Image Storage Operations
# =============================================================================
# Handles image uploads to object storage for catalog records.
#
# Paths are deterministic per upload:
#   {folder}/{unix-timestamp-ms}_{sanitized-stem}.{ext}
# e.g. authors/1718000000000_relatorio-final-2024.png
# =============================================================================

import logging
import time

from app.config import settings
from app.exceptions import UploadError
from core.models.catalog import StagedImage
from lib.row_store import RowStore, RowStoreError
from lib.utils import split_filename

logger = logging.getLogger(__name__)


def build_image_path(folder: str, filename: str, timestamp_ms: int | None = None) -> str:
    """
    Build the storage key for an uploaded image.

    Args:
        folder: Upload folder for the record kind ("authors", "books", "jobs")
        filename: Original filename as picked by the operator
        timestamp_ms: Unix time in milliseconds (defaults to now)

    Returns:
        ASCII-only storage path without spaces
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    stem, extension = split_filename(filename)
    return f"{folder}/{timestamp_ms}_{stem}.{extension}"


class ImageStorageService:
    """
    Service for image uploads.

    Uploads overwrite any object already at the same path and carry a
    cache-control hint, then resolve the object's public URL.
    """

    def __init__(self, store: RowStore, cache_control: str | None = None):
        self.store = store
        self.cache_control = cache_control or settings.image_cache_control

    def upload_image(self, folder: str, image: StagedImage) -> str:
        """
        Upload a staged image and return its public URL.

        Args:
            folder: Upload folder for the record kind
            image: The file the operator staged in the editor

        Returns:
            Public URL of the stored object

        Raises:
            UploadError: If the upload or URL resolution fails
        """
        path = build_image_path(folder, image.filename)

        try:
            self.store.upload(
                path,
                image.content,
                content_type=image.content_type,
                cache_control=self.cache_control,
                upsert=True,
            )
            public_url = self.store.get_public_url(path)

        except RowStoreError as e:
            logger.error(f"Storage upload failed for {path}: {e.message}")
            raise UploadError(path, e.message)

        logger.info(f"Uploaded image to storage: {path} ({image.size_bytes} bytes)")
        return public_url
