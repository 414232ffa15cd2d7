# =============================================================================
# core/models/catalog.py - Catalog Record Schemas
# =============================================================================
# These models define the three editable catalog record kinds:
# - QuoteRecord: a quote card (author photo with an adjustable offset)
# - BookRecord: a book recommendation card (cover image)
# - JobRecord: a job opening card (background image)
#
# Attributes are snake_case; JSON uses camelCase aliases (authorName,
# coverImage, lastDownloaded, ...). The store uses snake_case columns, and
# the per-kind ENTITY_CONFIGS table maps each camelCase field to its column.
#
# One generic pipeline (core/services/catalog_service.py) handles all three
# kinds by reading their EntityConfig instead of branching per kind.
# =============================================================================

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lib.utils import normalize_id


class EntityKind(str, Enum):
    """
    The three catalog collections. Values double as table names.
    """
    QUOTES = "quotes"
    BOOKS = "books"
    JOBS = "jobs"


# Suggested categories shown in the editor. The store accepts any string.
QUOTE_CATEGORIES: tuple[str, ...] = (
    "Inspiração",
    "Motivação",
    "Liderança",
    "Carreira",
    "Gestão de Pessoas",
    "Trabalho em Equipe",
    "Inovação",
    "Sucesso",
)

BOOK_CATEGORIES: tuple[str, ...] = (
    "Desenvolvimento",
    "Liderança",
    "Gestão",
    "Carreira",
    "Negócios",
    "Comportamento",
)


# =============================================================================
# Record Models
# =============================================================================

class CatalogModel(BaseModel):
    """Base config: camelCase aliases on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ImageOffset(CatalogModel):
    """Pan offset of the author photo inside its frame."""
    x: float = 0
    y: float = 0


class CatalogRecord(CatalogModel):
    """
    Fields shared by every catalog record.

    `id` is None until the first successful insert and never changes after.
    `last_downloaded` is only ever written by mark_downloaded().
    """

    id: str | None = Field(
        default=None,
        description="Store-assigned row ID (absent before first insert)"
    )

    caption: str = Field(
        default="",
        description="Social media caption published with the card"
    )

    footer_logo_url: str = Field(
        default="",
        description="Logo shown in the card footer"
    )

    last_downloaded: datetime | None = Field(
        default=None,
        description="When the card was last exported"
    )

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, value):
        if value is None or value == "":
            return None
        return normalize_id(value)


class QuoteRecord(CatalogRecord):
    """
    A quote card.

    Example:
        {
            "category": "Motivação",
            "quote": "The only way to do great work is to love what you do.",
            "authorName": "Steve Jobs",
            "authorImageOffset": {"x": 0, "y": 12}
        }
    """
    category: str = ""
    quote: str = ""
    author_name: str = ""
    author_role: str = ""
    author_image: str = ""
    author_image_offset: ImageOffset = Field(default_factory=ImageOffset)
    social_handle: str = ""
    website_url: str = ""


class BookRecord(CatalogRecord):
    """A book recommendation card."""
    category: str = ""
    book_title: str = ""
    book_author: str = ""
    cover_image: str = ""
    review: str = ""
    social_handle: str = ""


class JobRecord(CatalogRecord):
    """A job opening card. `sector` plays the role of category."""
    job_title: str = ""
    tagline: str = ""
    sector: str = ""
    job_code: str = ""
    contract_type: str = ""
    modality: str = ""
    location: str = ""
    image_url: str = ""
    website_url: str = ""


# =============================================================================
# Staged Image
# =============================================================================

@dataclass(frozen=True)
class StagedImage:
    """
    An image picked in the editor but not uploaded yet.

    Upload happens only when the record is saved.
    """
    filename: str
    content: bytes = field(repr=False)
    content_type: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def preview_url(self) -> str:
        """Local data: URL for previewing before save. Never persisted."""
        mime = self.content_type or "application/octet-stream"
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{mime};base64,{encoded}"


# =============================================================================
# Per-Kind Configuration
# =============================================================================

@dataclass(frozen=True)
class EntityConfig:
    """
    Everything the generic pipeline needs to know about one record kind.

    `columns` maps camelCase field names to store columns. `image_field`,
    `search_fields`, `category_field` and `echo_fields` name model
    attributes (snake_case).
    """
    kind: EntityKind
    label: str
    model: type[CatalogRecord]
    columns: dict[str, str]
    image_field: str
    upload_folder: str
    search_fields: tuple[str, ...]
    category_field: str
    echo_fields: tuple[str, ...] = ("caption",)
    categories: tuple[str, ...] = ()
    offset_field: str | None = None
    offset_columns: tuple[str, str] | None = None

    @property
    def table(self) -> str:
        return self.kind.value

    @property
    def image_column(self) -> str:
        return self.columns[to_camel(self.image_field)]

    @property
    def category_column(self) -> str:
        return self.columns[to_camel(self.category_field)]


ENTITY_CONFIGS: dict[EntityKind, EntityConfig] = {
    EntityKind.QUOTES: EntityConfig(
        kind=EntityKind.QUOTES,
        label="Quotes",
        model=QuoteRecord,
        columns={
            "category": "category",
            "quote": "quote",
            "authorName": "author_name",
            "authorRole": "author_role",
            "authorImage": "author_image",
            "socialHandle": "social_handle",
            "footerLogoUrl": "footer_logo_url",
            "websiteUrl": "website_url",
            "caption": "caption",
        },
        image_field="author_image",
        upload_folder="authors",
        search_fields=("quote", "author_name", "category"),
        category_field="category",
        echo_fields=("caption", "author_image_offset"),
        categories=QUOTE_CATEGORIES,
        offset_field="authorImageOffset",
        offset_columns=("author_image_offset_x", "author_image_offset_y"),
    ),
    EntityKind.BOOKS: EntityConfig(
        kind=EntityKind.BOOKS,
        label="Books",
        model=BookRecord,
        columns={
            "category": "category",
            "bookTitle": "book_title",
            "bookAuthor": "book_author",
            "coverImage": "cover_image",
            "review": "review",
            "socialHandle": "social_handle",
            "footerLogoUrl": "footer_logo_url",
            "caption": "caption",
        },
        image_field="cover_image",
        upload_folder="books",
        search_fields=("book_title", "book_author"),
        category_field="category",
        categories=BOOK_CATEGORIES,
    ),
    EntityKind.JOBS: EntityConfig(
        kind=EntityKind.JOBS,
        label="Jobs",
        model=JobRecord,
        columns={
            "jobTitle": "job_title",
            "tagline": "tagline",
            "sector": "sector",
            "jobCode": "job_code",
            "contractType": "contract_type",
            "modality": "modality",
            "location": "location",
            "imageUrl": "image_url",
            "footerLogoUrl": "footer_logo_url",
            "websiteUrl": "website_url",
            "caption": "caption",
        },
        image_field="image_url",
        upload_folder="jobs",
        search_fields=("job_title", "job_code"),
        category_field="sector",
    ),
}


def get_entity_config(kind: EntityKind | str) -> EntityConfig:
    """Look up the configuration for a kind (enum or its string value)."""
    return ENTITY_CONFIGS[EntityKind(kind)]
