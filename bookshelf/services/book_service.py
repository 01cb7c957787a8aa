"""
Bookshelf API — Book Service (Business Logic)
===============================================

What:  Validation and field handling for the books resource, independent of
       HTTP concerns.
How:   Every method receives the request's BookStore, applies the route's
       rules and makes exactly one storage call (plus the id lookup for the
       single-item routes).
Who:   Called by the route handlers in routes/books.py.

Error mapping:
    Missing fields         → ValidationError   (400)
    Malformed id           → InvalidBookIdError (404, no storage access)
    Unknown id             → NotFoundError     (404)
    Coercion / write fail  → PersistenceError  (400)
    Read / delete fail     → StorageError      (500, propagated as-is)
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from bookshelf.exceptions import (
    InvalidBookIdError,
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from bookshelf.models.book import BOOK_FIELDS, Book, is_valid_book_id
from bookshelf.schemas.book import BookFields, BookPayload
from bookshelf.services.book_store import BookStore

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Los campos titulo, autor, genero y fecha son obligatorios"
NO_FIELDS_MESSAGE = (
    "Al menos uno de estos campos debe ser enviado: "
    "Titulo, Autor, genero o Fecha de publicación"
)
DELETED_MESSAGE = "El libro {title} fue eliminado correctamente"


def coerce_book_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Coerce the four raw field values to their stored types.

    Raises:
        PersistenceError: A value cannot be converted; the message names the
            field and the reason, e.g. "publication_date: Input should be a
            valid date or datetime, invalid character in year".
    """
    try:
        return BookFields.model_validate(fields).model_dump()
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first['msg']}" if location else first["msg"]
        raise PersistenceError(
            message=message,
            context={"errors": e.error_count()},
        ) from e


def merge_book_fields(book: Book, supplied: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combine a stored book with the fields supplied in an update request.

    A field present in `supplied` wins; anything else keeps the stored value.
    Callers pass BookPayload.supplied(), so falsy values never reach here and
    a field cannot be cleared through an update.
    """
    return {
        name: supplied[name] if name in supplied else getattr(book, name)
        for name in BOOK_FIELDS
    }


class BookService:
    """
    Business logic layer for book operations.

    Stateless: the store is passed to every call, so a single module-level
    instance serves all requests.
    """

    async def list_books(self, store: BookStore) -> List[Book]:
        books = await store.find_all()
        logger.debug("Listed %d books", len(books))
        return books

    async def create_book(self, store: BookStore, payload: BookPayload) -> Book:
        """
        Validate and insert a new book.

        Raises:
            ValidationError: Any of the four fields is absent or falsy.
            PersistenceError: Coercion failed or the store rejected the insert.
        """
        missing = payload.missing()
        if missing:
            raise ValidationError(message=MISSING_FIELDS_MESSAGE, fields=missing)

        fields = coerce_book_fields(payload.supplied())
        try:
            book = await store.insert(fields)
        except StorageError as e:
            raise PersistenceError(message=e.message, context=e.context) from e

        logger.info("Book created: %s (%s)", book.id, book.title)
        return book

    async def resolve_book(self, store: BookStore, book_id: str) -> Book:
        """
        Load the book addressed by a path identifier.

        The id format is checked first; a malformed id never reaches the
        store. Hex case is not significant: ids are looked up lowercase.

        Raises:
            InvalidBookIdError: `book_id` is not 24 hexadecimal characters.
            NotFoundError: No book has this id.
            StorageError: The lookup failed.
        """
        if not is_valid_book_id(book_id):
            raise InvalidBookIdError(resource_id=book_id)

        book = await store.find_by_id(book_id.lower())
        if book is None:
            raise NotFoundError(resource_id=book_id)
        return book

    async def update_book(
        self,
        store: BookStore,
        book: Book,
        payload: BookPayload,
    ) -> Book:
        """
        Apply a full update (PUT): supplied fields overwrite, others are kept.

        Raises:
            PersistenceError: Coercion or save failed.
        """
        return await self._apply(store, book, payload.supplied())

    async def patch_book(
        self,
        store: BookStore,
        book: Book,
        payload: BookPayload,
    ) -> Book:
        """
        Apply a partial update (PATCH).

        Unlike PUT, at least one field must be supplied; otherwise the
        request is rejected and the book is left untouched.

        Raises:
            ValidationError: No field supplied.
            PersistenceError: Coercion or save failed.
        """
        supplied = payload.supplied()
        if not supplied:
            raise ValidationError(message=NO_FIELDS_MESSAGE, fields=list(BOOK_FIELDS))
        return await self._apply(store, book, supplied)

    async def delete_book(self, store: BookStore, book: Book) -> str:
        """Remove `book` and return the confirmation message."""
        title = book.title
        book_id = book.id
        await store.delete(book)
        logger.info("Book deleted: %s (%s)", book_id, title)
        return DELETED_MESSAGE.format(title=title)

    async def _apply(
        self,
        store: BookStore,
        book: Book,
        supplied: Dict[str, Any],
    ) -> Book:
        fields = coerce_book_fields(merge_book_fields(book, supplied))
        for name, value in fields.items():
            setattr(book, name, value)

        try:
            saved = await store.save(book)
        except StorageError as e:
            raise PersistenceError(message=e.message, context=e.context) from e

        logger.info("Book updated: %s (fields: %s)", saved.id, ", ".join(sorted(supplied)) or "none")
        return saved


# ── Singleton Instance ────────────────────────────────────────────────────
book_service = BookService()
