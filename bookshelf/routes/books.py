"""
Bookshelf API — Books Route Handlers
======================================

What:  CRUD endpoints for the books resource.
How:   Each handler extracts the body / path id, delegates to BookService and
       picks the status code. Errors are raised as application exceptions
       and rendered by the global handlers in main.py.

Route Inventory (relative to settings.books_prefix):
    GET    <prefix>   list all books (204 when the collection is empty)
    POST   <prefix>   create a book
    GET    /{id}      fetch one book
    PUT    /{id}      full update
    PATCH  /{id}      partial update
    DELETE /{id}      delete a book

The single-item routes depend on `resolve_book`, which validates the id
and loads the record before the handler body runs.
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Body, Depends, Response, status

from bookshelf.config import settings
from bookshelf.models.book import Book
from bookshelf.schemas.book import (
    BookPayload,
    BookResponse,
    ErrorResponse,
    MessageResponse,
)
from bookshelf.services.book_service import book_service
from bookshelf.services.book_store import BookStore, get_book_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.books_prefix, tags=["Books"])

_NOT_FOUND = {404: {"description": "Malformed or unknown book id", "model": ErrorResponse}}


async def resolve_book(
    book_id: str,
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Resolve the `{book_id}` path segment to a stored book (404 otherwise)."""
    return await book_service.resolve_book(store, book_id)


@router.get(
    "",
    response_model=List[BookResponse],
    responses={
        200: {"description": "All stored books"},
        204: {"description": "The collection is empty"},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="List all books",
)
async def list_books(
    store: BookStore = Depends(get_book_store),
) -> Union[List[BookResponse], Response]:
    books = await book_service.list_books(store)
    if not books:
        logger.debug("Book collection is empty, answering 204")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [BookResponse.model_validate(book) for book in books]


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing field or rejected value", "model": ErrorResponse},
    },
    summary="Create a book",
)
async def create_book(
    payload: Optional[BookPayload] = Body(default=None),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    """All four fields are required; empty values count as missing."""
    book = await book_service.create_book(store, payload or BookPayload())
    return BookResponse.model_validate(book)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        **_NOT_FOUND,
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get a book by id",
)
async def get_book(book: Book = Depends(resolve_book)) -> BookResponse:
    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        **_NOT_FOUND,
        400: {"description": "Rejected value", "model": ErrorResponse},
    },
    summary="Update a book",
)
async def update_book(
    payload: Optional[BookPayload] = Body(default=None),
    book: Book = Depends(resolve_book),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    """Supplied fields overwrite the stored ones; omitted or empty fields are kept."""
    updated = await book_service.update_book(store, book, payload or BookPayload())
    return BookResponse.model_validate(updated)


@router.patch(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        **_NOT_FOUND,
        400: {"description": "No field supplied or rejected value", "model": ErrorResponse},
    },
    summary="Partially update a book",
)
async def patch_book(
    payload: Optional[BookPayload] = Body(default=None),
    book: Book = Depends(resolve_book),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    """At least one of title, author, genre or publication_date must be supplied."""
    updated = await book_service.patch_book(store, book, payload or BookPayload())
    return BookResponse.model_validate(updated)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses={
        **_NOT_FOUND,
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a book",
)
async def delete_book(
    book: Book = Depends(resolve_book),
    store: BookStore = Depends(get_book_store),
) -> MessageResponse:
    message = await book_service.delete_book(store, book)
    return MessageResponse(message=message)
