"""
Bookshelf API — Book Service Unit Tests
=========================================

What:  Tests for BookService business logic and its field helpers.
How:   Uses an AsyncMock store (no database, no HTTP).

What we test:
    ✅ Create validates fields, coerces values and wraps store failures
    ✅ Resolve checks the id format before touching the store
    ✅ Update / patch merge semantics and PATCH's no-field rejection
    ✅ Delete returns the confirmation message
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from bookshelf.exceptions import (
    InvalidBookIdError,
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from bookshelf.models.book import Book
from bookshelf.schemas.book import BookPayload
from bookshelf.services.book_service import (
    BookService,
    coerce_book_fields,
    merge_book_fields,
)

BOOK_ID = "64b7f0c2a1b2c3d4e5f60718"


def make_book(**overrides):
    fields = {
        "id": BOOK_ID,
        "title": "Dune",
        "author": "Herbert",
        "genre": "SciFi",
        "publication_date": date(1965, 1, 1),
    }
    fields.update(overrides)
    return Book(**fields)


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.find_all = AsyncMock(return_value=[])
    store.find_by_id = AsyncMock(return_value=None)
    store.insert = AsyncMock(side_effect=lambda fields: Book(id=BOOK_ID, **fields))
    store.save = AsyncMock(side_effect=lambda book: book)
    store.delete = AsyncMock(return_value=None)
    return store


class TestFieldHelpers:

    def test_merge_prefers_supplied_values(self):
        book = make_book()

        merged = merge_book_fields(book, {"genre": "Science Fiction"})

        assert merged == {
            "title": "Dune",
            "author": "Herbert",
            "genre": "Science Fiction",
            "publication_date": date(1965, 1, 1),
        }

    def test_merge_with_nothing_supplied_keeps_book(self):
        book = make_book()

        merged = merge_book_fields(book, {})

        assert merged["title"] == "Dune"
        assert merged["publication_date"] == date(1965, 1, 1)

    def test_payload_treats_falsy_values_as_not_supplied(self):
        payload = BookPayload(title="", author=None, genre=0, publication_date="1965-01-01")

        assert payload.supplied() == {"publication_date": "1965-01-01"}
        assert payload.missing() == ["title", "author", "genre"]

    @pytest.mark.parametrize("body", [[], ["title"], "x", 42])
    def test_payload_from_non_object_body_is_empty(self, body):
        payload = BookPayload.model_validate(body)

        assert payload.supplied() == {}
        assert payload.missing() == ["title", "author", "genre", "publication_date"]

    def test_coerce_parses_iso_date(self):
        fields = coerce_book_fields(
            {"title": "Dune", "author": "Herbert", "genre": "SciFi", "publication_date": "1965-01-01"}
        )

        assert fields["publication_date"] == date(1965, 1, 1)

    def test_coerce_failure_names_field(self):
        with pytest.raises(PersistenceError) as exc_info:
            coerce_book_fields(
                {"title": "Dune", "author": "Herbert", "genre": "SciFi", "publication_date": "soon"}
            )

        assert exc_info.value.message.startswith("publication_date: ")
        assert exc_info.value.status_code == 400


class TestBookServiceCreate:

    def setup_method(self):
        self.service = BookService()

    @pytest.mark.asyncio
    async def test_create_inserts_coerced_fields(self, mock_store):
        payload = BookPayload(
            title="Dune", author="Herbert", genre="SciFi", publication_date="1965-01-01"
        )

        book = await self.service.create_book(mock_store, payload)

        assert book.id == BOOK_ID
        mock_store.insert.assert_awaited_once_with(
            {
                "title": "Dune",
                "author": "Herbert",
                "genre": "SciFi",
                "publication_date": date(1965, 1, 1),
            }
        )

    @pytest.mark.asyncio
    async def test_create_missing_field_raises_validation_error(self, mock_store):
        payload = BookPayload(title="Dune", author="Herbert", genre="SciFi")

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_book(mock_store, payload)

        assert exc_info.value.fields == ["publication_date"]
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_store_failure_becomes_persistence_error(self, mock_store):
        mock_store.insert = AsyncMock(side_effect=StorageError(message="duplicate key"))
        payload = BookPayload(
            title="Dune", author="Herbert", genre="SciFi", publication_date="1965-01-01"
        )

        with pytest.raises(PersistenceError) as exc_info:
            await self.service.create_book(mock_store, payload)

        assert exc_info.value.message == "duplicate key"


class TestBookServiceResolve:

    def setup_method(self):
        self.service = BookService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("book_id", ["", "abc", "g" * 24, BOOK_ID + "0"])
    async def test_malformed_id_skips_store(self, mock_store, book_id):
        with pytest.raises(InvalidBookIdError):
            await self.service.resolve_book(mock_store, book_id)

        mock_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_id_raises_not_found(self, mock_store):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.resolve_book(mock_store, BOOK_ID)

        assert not isinstance(exc_info.value, InvalidBookIdError)
        assert exc_info.value.message == "El Libro no fue encontrado"

    @pytest.mark.asyncio
    async def test_lookup_is_lowercased(self, mock_store):
        mock_store.find_by_id = AsyncMock(return_value=make_book())

        book = await self.service.resolve_book(mock_store, BOOK_ID.upper())

        assert book.title == "Dune"
        mock_store.find_by_id.assert_awaited_once_with(BOOK_ID)

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self, mock_store):
        mock_store.find_by_id = AsyncMock(side_effect=StorageError(message="connection reset"))

        with pytest.raises(StorageError) as exc_info:
            await self.service.resolve_book(mock_store, BOOK_ID)

        assert exc_info.value.status_code == 500


class TestBookServiceUpdate:

    def setup_method(self):
        self.service = BookService()

    @pytest.mark.asyncio
    async def test_update_applies_supplied_fields(self, mock_store):
        book = make_book()

        updated = await self.service.update_book(
            mock_store, book, BookPayload(author="Frank Herbert", title="")
        )

        assert updated.author == "Frank Herbert"
        assert updated.title == "Dune"
        mock_store.save.assert_awaited_once_with(book)

    @pytest.mark.asyncio
    async def test_update_with_empty_body_saves_unchanged(self, mock_store):
        book = make_book()

        updated = await self.service.update_book(mock_store, book, BookPayload())

        assert updated.genre == "SciFi"
        mock_store.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_patch_without_fields_is_rejected(self, mock_store):
        book = make_book()

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_book(mock_store, book, BookPayload(title=""))

        assert exc_info.value.message.startswith("Al menos uno de estos campos")
        mock_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_patch_save_failure_becomes_persistence_error(self, mock_store):
        mock_store.save = AsyncMock(side_effect=StorageError(message="lock timeout"))

        with pytest.raises(PersistenceError) as exc_info:
            await self.service.patch_book(mock_store, make_book(), BookPayload(genre="Novel"))

        assert exc_info.value.message == "lock timeout"
        assert exc_info.value.status_code == 400


class TestBookServiceDelete:

    def setup_method(self):
        self.service = BookService()

    @pytest.mark.asyncio
    async def test_delete_returns_confirmation(self, mock_store):
        book = make_book(title="Emma")

        message = await self.service.delete_book(mock_store, book)

        assert message == "El libro Emma fue eliminado correctamente"
        mock_store.delete.assert_awaited_once_with(book)

    @pytest.mark.asyncio
    async def test_delete_failure_propagates_as_storage_error(self, mock_store):
        mock_store.delete = AsyncMock(side_effect=StorageError(message="disk full"))

        with pytest.raises(StorageError) as exc_info:
            await self.service.delete_book(mock_store, make_book())

        assert not isinstance(exc_info.value, PersistenceError)
