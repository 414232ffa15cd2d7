# =============================================================================
# tests/test_catalog_service.py - Data Access Layer Tests
# =============================================================================
# This module contains tests for:
# - Row <-> record mapping (null columns, split offset columns)
# - list / get / random reads and their error absorption
# - save (insert, update, image upload ordering, sticky image URL)
# - delete and mark_downloaded
#
# Tests run against the in-memory row store in tests/fakes.py.
# =============================================================================

import random
import re

import pytest

from app.exceptions import FetchError, PersistenceError, RecordNotFoundError, UploadError
from core.models.catalog import BookRecord, EntityKind, ImageOffset, JobRecord, QuoteRecord, StagedImage
from core.services.catalog_service import CatalogService
from core.services.storage_service import ImageStorageService
from tests.fakes import PUBLIC_URL_BASE


@pytest.fixture
def quotes(store):
    return CatalogService(store, EntityKind.QUOTES, rng=random.Random(7))


@pytest.fixture
def books(store):
    return CatalogService(store, EntityKind.BOOKS, rng=random.Random(7))


@pytest.fixture
def jobs(store):
    return CatalogService(store, EntityKind.JOBS, rng=random.Random(7))


def png(name="Foto do Autor.PNG"):
    return StagedImage(filename=name, content=b"\x89PNG fake", content_type="image/png")


# =============================================================================
# Mapping Tests
# =============================================================================

class TestRecordFromRow:
    """Test CatalogService.record_from_row()."""

    def test_quote_row(self, quotes, sample_quote_row):
        record = quotes.record_from_row(sample_quote_row)

        assert isinstance(record, QuoteRecord)
        assert record.id == "quote-123"
        assert record.author_name == "Robert Collier"
        assert record.author_image_offset == ImageOffset(x=4, y=-12)
        assert record.caption == ""
        assert record.footer_logo_url == ""
        assert record.last_downloaded is None

    def test_unparseable_offset_is_zero(self, quotes, sample_quote_row):
        sample_quote_row["author_image_offset_x"] = None
        sample_quote_row["author_image_offset_y"] = "abc"

        record = quotes.record_from_row(sample_quote_row)

        assert record.author_image_offset == ImageOffset(x=0, y=0)

    def test_book_row(self, books, sample_book_row):
        record = books.record_from_row(sample_book_row)

        assert isinstance(record, BookRecord)
        assert record.book_author == "Simon Sinek"
        assert record.caption == "Leitura da semana"
        assert record.last_downloaded.year == 2024

    def test_job_row(self, jobs, sample_job_row):
        record = jobs.record_from_row(sample_job_row)

        assert isinstance(record, JobRecord)
        assert record.sector == "Recursos Humanos"
        assert record.image_url == ""


class TestBuildPayload:
    """Test CatalogService.build_payload()."""

    def test_quote_payload_splits_offset(self, quotes):
        record = QuoteRecord(
            id="q1",
            quote="Q",
            author_name="A",
            author_image_offset=ImageOffset(x=2.5, y=-1),
        )

        payload = quotes.build_payload(record, "https://img")

        assert payload["author_image"] == "https://img"
        assert payload["author_image_offset_x"] == 2.5
        assert payload["author_image_offset_y"] == -1
        assert payload["author_name"] == "A"
        assert "authorImageOffset" not in payload

    def test_payload_never_has_id_or_last_downloaded(self, books, sample_book_row):
        record = books.record_from_row(sample_book_row)

        payload = books.build_payload(record, "")

        assert "id" not in payload
        assert "last_downloaded" not in payload

    def test_job_payload_columns(self, jobs):
        payload = jobs.build_payload(JobRecord(job_code="RH-1", sector="TI"), "u")

        assert payload["job_code"] == "RH-1"
        assert payload["sector"] == "TI"
        assert payload["image_url"] == "u"


# =============================================================================
# Read Tests
# =============================================================================

class TestListRecords:
    """Test CatalogService.list_records()."""

    def test_newest_first(self, store, books):
        store.add_row("books", book_title="Older")
        store.add_row("books", book_title="Newer")

        titles = [record.book_title for record in books.list_records()]

        assert titles == ["Newer", "Older"]

    def test_empty_table(self, books):
        assert books.list_records() == []

    def test_query_failure_returns_empty_list(self, store, books):
        store.add_row("books", book_title="Hidden")
        store.fail_on.add("query")

        assert books.list_records() == []


class TestGetRecord:
    """Test CatalogService.get_record()."""

    def test_found(self, store, quotes):
        row = store.add_row("quotes", quote="Q", author_name="A")
        assert quotes.get_record(row["id"]).quote == "Q"

    def test_missing(self, quotes):
        with pytest.raises(RecordNotFoundError):
            quotes.get_record("nope")

    def test_query_failure(self, store, quotes):
        store.fail_on.add("query")
        with pytest.raises(FetchError) as exc_info:
            quotes.get_record("any")
        assert exc_info.value.status_code == 502


class TestPickRandom:
    """Test CatalogService.pick_random()."""

    def test_respects_category(self, store, books):
        store.add_row("books", book_title="L1", category="Liderança")
        store.add_row("books", book_title="L2", category="Liderança")
        store.add_row("books", book_title="G1", category="Gestão")

        for _ in range(20):
            record = books.pick_random("Liderança")
            assert record.category == "Liderança"

    def test_jobs_filter_on_sector(self, store, jobs):
        store.add_row("jobs", job_title="Dev", sector="TI")
        store.add_row("jobs", job_title="RH", sector="Pessoas")

        assert jobs.pick_random("TI").job_title == "Dev"

    def test_no_match_is_none(self, store, books):
        store.add_row("books", book_title="G1", category="Gestão")
        assert books.pick_random("Liderança") is None

    def test_without_category_picks_any(self, store, quotes):
        ids = {store.add_row("quotes", quote=f"Q{i}")["id"] for i in range(5)}
        assert quotes.pick_random().id in ids

    def test_draws_from_capped_sample(self, store):
        service = CatalogService(store, EntityKind.QUOTES, sample_limit=2, rng=random.Random(1))
        for i in range(5):
            store.add_row("quotes", quote=f"Q{i}")

        # Fake returns rows in insertion order, so only Q0/Q1 are eligible
        picks = {service.pick_random().quote for _ in range(20)}

        assert picks <= {"Q0", "Q1"}

    def test_query_failure_is_none(self, store, quotes):
        store.add_row("quotes", quote="Q")
        store.fail_on.add("query")
        assert quotes.pick_random() is None


# =============================================================================
# Save Tests
# =============================================================================

class TestSaveRecord:
    """Test CatalogService.save_record()."""

    def test_insert_assigns_id(self, store, quotes):
        saved = quotes.save_record(QuoteRecord(quote="Test", author_name="A"))

        assert saved.id is not None
        assert saved.author_image == ""
        assert saved.quote == "Test"
        assert len(store.rows("quotes")) == 1
        assert [r.id for r in quotes.list_records()] == [saved.id]

    def test_insert_with_image_uploads_first(self, store, quotes):
        saved = quotes.save_record(QuoteRecord(quote="Test", author_name="A"), png())

        paths = list(store.objects)
        assert len(paths) == 1
        assert re.fullmatch(r"authors/\d+_foto-do-autor\.png", paths[0])
        assert saved.author_image == f"{PUBLIC_URL_BASE}/{paths[0]}"
        assert store.rows("quotes")[0]["author_image"] == saved.author_image

        operations = [operation for operation, _ in store.calls]
        assert operations.index("upload") < operations.index("insert")

    def test_upload_options(self, store, books):
        books.save_record(BookRecord(book_title="T"), png("capa.webp"))

        stored = next(iter(store.objects.values()))
        assert stored["upsert"] is True
        assert stored["cache_control"] == "3600"
        assert stored["content_type"] == "image/png"

    def test_upload_folder_per_kind(self, store, books, jobs):
        books.save_record(BookRecord(book_title="T"), png("capa.png"))
        jobs.save_record(JobRecord(job_title="J"), png("vaga.png"))

        folders = sorted(path.split("/")[0] for path in store.objects)
        assert folders == ["books", "jobs"]

    def test_update_without_image_keeps_url(self, store, quotes):
        saved = quotes.save_record(QuoteRecord(quote="Test"), png())
        url = saved.author_image

        edited = saved.model_copy(update={"quote": "Edited"})
        updated = quotes.save_record(edited)

        assert updated.author_image == url
        assert quotes.get_record(saved.id).author_image == url
        assert quotes.get_record(saved.id).quote == "Edited"
        assert len(store.objects) == 1

    def test_insert_scenario(self, quotes):
        record = QuoteRecord(category="Motivação", quote="Test", author_name="A")

        saved = quotes.save_record(record)

        assert saved.id
        assert saved.category == "Motivação"
        assert saved.quote == "Test"
        assert saved.author_name == "A"

    def test_update_with_new_image_replaces_url(self, store, quotes):
        saved = quotes.save_record(QuoteRecord(quote="Test"), png("a.png"))

        updated = quotes.save_record(saved, png("Nova Foto.JPG"))

        new_path = next(path for path in store.objects if path.endswith("_nova-foto.jpg"))
        assert re.fullmatch(r"authors/\d+_nova-foto\.jpg", new_path)
        assert updated.author_image == f"{PUBLIC_URL_BASE}/{new_path}"
        assert not updated.author_image.startswith("data:")
        assert updated.id == saved.id

    def test_update_unknown_id(self, quotes):
        with pytest.raises(RecordNotFoundError) as exc_info:
            quotes.save_record(QuoteRecord(id="missing", quote="Q"))
        assert exc_info.value.status_code == 404

    def test_update_round_trips_offset(self, store, quotes):
        saved = quotes.save_record(QuoteRecord(quote="Q"))
        moved = saved.model_copy(update={"author_image_offset": ImageOffset(x=10, y=-3)})

        result = quotes.save_record(moved)

        assert result.author_image_offset == ImageOffset(x=10, y=-3)
        row = store.rows("quotes")[0]
        assert row["author_image_offset_x"] == 10
        assert row["author_image_offset_y"] == -3

    def test_save_never_writes_last_downloaded(self, store, books):
        saved = books.save_record(BookRecord(book_title="T"))
        books.mark_downloaded(saved.id)
        stamped = store.rows("books")[0]["last_downloaded"]

        record = books.get_record(saved.id)
        books.save_record(record.model_copy(update={"review": "R"}))

        assert store.rows("books")[0]["last_downloaded"] == stamped

    def test_upload_failure_writes_nothing(self, store, quotes):
        store.fail_on.add("upload")

        with pytest.raises(UploadError) as exc_info:
            quotes.save_record(QuoteRecord(quote="Q"), png())

        assert "simulated upload failure" in exc_info.value.message
        assert store.rows("quotes") == []
        assert not any(operation == "insert" for operation, _ in store.calls)

    def test_upload_failure_is_persistence_error(self, store, quotes):
        store.fail_on.add("get_public_url")
        with pytest.raises(PersistenceError):
            quotes.save_record(QuoteRecord(quote="Q"), png())

    def test_insert_failure_carries_store_message(self, store, books):
        store.fail_on.add("insert")

        with pytest.raises(PersistenceError) as exc_info:
            books.save_record(BookRecord(book_title="T"))

        assert exc_info.value.message == "simulated insert failure"

    def test_echoes_store_caption(self, store, books, monkeypatch):
        original_insert = store.insert

        def insert_with_caption(table, row):
            return original_insert(table, {**row, "caption": "Gerada pelo banco"})

        monkeypatch.setattr(store, "insert", insert_with_caption)

        saved = books.save_record(BookRecord(book_title="T"))

        assert saved.caption == "Gerada pelo banco"


# =============================================================================
# Delete & Download Tests
# =============================================================================

class TestDeleteRecord:
    """Test CatalogService.delete_record()."""

    def test_delete_then_list(self, store, books):
        keep = store.add_row("books", book_title="Keep")
        gone = store.add_row("books", book_title="Gone")

        books.delete_record(gone["id"])

        assert [r.id for r in books.list_records()] == [keep["id"]]

    def test_delete_unknown_id_is_ok(self, books):
        books.delete_record("missing")

    def test_delete_failure(self, store, books):
        row = store.add_row("books", book_title="Stays")
        store.fail_on.add("delete")

        with pytest.raises(PersistenceError):
            books.delete_record(row["id"])

        assert len(store.rows("books")) == 1


class TestMarkDownloaded:
    """Test CatalogService.mark_downloaded()."""

    def test_stamps_current_time(self, store, jobs):
        row = store.add_row("jobs", job_title="Dev")

        downloaded_at = jobs.mark_downloaded(row["id"])

        assert downloaded_at.tzinfo is not None
        assert store.rows("jobs")[0]["last_downloaded"] == downloaded_at.isoformat()
        assert jobs.get_record(row["id"]).last_downloaded == downloaded_at

    def test_later_stamp_wins(self, store, jobs):
        row = store.add_row("jobs", job_title="Dev")

        first = jobs.mark_downloaded(row["id"])
        second = jobs.mark_downloaded(row["id"])

        assert second >= first
        assert jobs.get_record(row["id"]).last_downloaded == second

    def test_only_touches_last_downloaded(self, store, jobs):
        row = store.add_row("jobs", job_title="Dev", sector="TI")

        jobs.mark_downloaded(row["id"])

        stored = store.rows("jobs")[0]
        assert stored["job_title"] == "Dev"
        assert stored["sector"] == "TI"

    def test_failure_raises(self, store, jobs):
        store.fail_on.add("update")
        with pytest.raises(PersistenceError):
            jobs.mark_downloaded("any")


# =============================================================================
# Storage Service Tests
# =============================================================================

class TestImageStorageService:
    """Test ImageStorageService directly."""

    def test_custom_cache_control(self, store):
        storage = ImageStorageService(store, cache_control="60")

        url = storage.upload_image("books", png("x.png"))

        path = next(iter(store.objects))
        assert store.objects[path]["cache_control"] == "60"
        assert url == f"{PUBLIC_URL_BASE}/{path}"

    def test_upload_error_details(self, store):
        store.fail_on.add("upload")

        with pytest.raises(UploadError) as exc_info:
            ImageStorageService(store).upload_image("books", png("x.png"))

        assert exc_info.value.code == "STORAGE_UPLOAD_ERROR"
        assert exc_info.value.details["path"].startswith("books/")
