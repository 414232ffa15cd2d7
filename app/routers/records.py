# =============================================================================
# app/routers/records.py - Catalog Record Endpoints
# =============================================================================
# CRUD over quotes, books and jobs. The record kind is the first path
# segment; every endpoint delegates to the CatalogService for that kind.
#
# Create/update take multipart form data:
# - record: the record as a JSON object (camelCase fields)
# - image: optional new image file, uploaded before the row is written
# =============================================================================

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, File, Form, Path, Query, UploadFile
from pydantic import BaseModel, Field, ValidationError

from app.config import settings
from app.dependencies import CatalogServiceDep
from app.exceptions import FileTooLargeError, InvalidFileTypeError, InvalidRecordError
from core.models.catalog import CatalogRecord, StagedImage
from core.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class RandomRecordResponse(BaseModel):
    """A random pick; record is null when nothing matched."""
    record: dict[str, Any] | None = None


class CategoriesResponse(BaseModel):
    """Category suggestions for a kind (not enforced by the store)."""
    kind: str = Field(..., examples=["quotes"])
    category_field: str = Field(..., serialization_alias="categoryField", examples=["category"])
    categories: list[str] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    id: str
    deleted: bool = True


class DownloadedResponse(BaseModel):
    id: str
    last_downloaded: str = Field(..., serialization_alias="lastDownloaded")


# =============================================================================
# Helper Functions
# =============================================================================

def _serialize(record: CatalogRecord) -> dict[str, Any]:
    """Record as JSON-ready dict with camelCase keys."""
    return record.model_dump(mode="json", by_alias=True)


def _parse_record(service: CatalogService, raw: str, record_id: str | None = None) -> CatalogRecord:
    """Parse the multipart `record` field into the kind's model."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidRecordError(str(e))

    if not isinstance(data, dict):
        raise InvalidRecordError("expected a JSON object")

    if record_id is not None:
        data["id"] = record_id
    else:
        data.pop("id", None)

    try:
        return service.config.model.model_validate(data)
    except ValidationError as e:
        raise InvalidRecordError(str(e))


async def _read_image(image: UploadFile | None) -> StagedImage | None:
    """Validate an uploaded image and stage it for the service."""
    if image is None or not image.filename:
        return None

    filename = image.filename
    file_ext = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if file_ext not in settings.allowed_image_extensions_list:
        raise InvalidFileTypeError(filename, settings.allowed_image_extensions_list)

    content = await image.read()
    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    return StagedImage(filename=filename, content=content, content_type=image.content_type)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/{kind}")
async def list_records(service: CatalogServiceDep) -> list[dict[str, Any]]:
    """
    List every record of a kind, newest first.

    A backend failure yields an empty list rather than an error.
    """
    return [_serialize(record) for record in service.list_records()]


@router.get("/{kind}/random", response_model=RandomRecordResponse)
async def random_record(
    service: CatalogServiceDep,
    category: Annotated[str | None, Query(description="Only pick from this category")] = None,
):
    """
    Pick a random record, optionally within a category.

    Picks among at most RANDOM_SAMPLE_LIMIT rows, not the whole table.
    """
    record = service.pick_random(category)
    return RandomRecordResponse(record=_serialize(record) if record else None)


@router.get("/{kind}/categories", response_model=CategoriesResponse)
async def list_categories(service: CatalogServiceDep):
    """Suggested categories for the editor."""
    config = service.config
    return CategoriesResponse(
        kind=config.kind.value,
        category_field=config.model.model_fields[config.category_field].alias or config.category_field,
        categories=list(config.categories),
    )


@router.get("/{kind}/{record_id}")
async def get_record(
    service: CatalogServiceDep,
    record_id: Annotated[str, Path(description="Record ID")],
) -> dict[str, Any]:
    """Fetch one record."""
    return _serialize(service.get_record(record_id))


@router.post("/{kind}", status_code=201)
async def create_record(
    service: CatalogServiceDep,
    record: Annotated[str, Form(description="Record as a JSON object")],
    image: Annotated[UploadFile | None, File(description="Optional image")] = None,
) -> dict[str, Any]:
    """
    Create a record, uploading the image first if one is attached.

    Any `id` in the payload is ignored; the store assigns it.
    """
    parsed = _parse_record(service, record)
    staged = await _read_image(image)
    return _serialize(service.save_record(parsed, staged))


@router.put("/{kind}/{record_id}")
async def update_record(
    service: CatalogServiceDep,
    record_id: Annotated[str, Path(description="Record ID")],
    record: Annotated[str, Form(description="Record as a JSON object")],
    image: Annotated[UploadFile | None, File(description="Optional new image")] = None,
) -> dict[str, Any]:
    """
    Replace a record's editable fields.

    Without an image the current image URL is kept as sent in the payload.
    """
    parsed = _parse_record(service, record, record_id=record_id)
    staged = await _read_image(image)
    return _serialize(service.save_record(parsed, staged))


@router.delete("/{kind}/{record_id}", response_model=DeleteResponse)
async def delete_record(
    service: CatalogServiceDep,
    record_id: Annotated[str, Path(description="Record ID")],
):
    """Delete a record. Deleting an unknown ID succeeds."""
    service.delete_record(record_id)
    return DeleteResponse(id=record_id)


@router.post("/{kind}/{record_id}/downloaded", response_model=DownloadedResponse)
async def mark_downloaded(
    service: CatalogServiceDep,
    record_id: Annotated[str, Path(description="Record ID")],
):
    """Record that the card was exported just now."""
    downloaded_at = service.mark_downloaded(record_id)
    return DownloadedResponse(id=record_id, last_downloaded=downloaded_at.isoformat())
