"""
Bookshelf API — Book Storage Interface
========================================

What:  Abstract storage collaborator for books, plus the SQLAlchemy-backed
       implementation used in production.
How:   Routes and BookService depend only on BookStore. The concrete store
       is supplied per request by the `get_book_store` dependency, which
       tests replace with an in-memory fake via `app.dependency_overrides`.

Contract shared by every implementation:
    - find_all()       → every stored book, ordered by id
    - find_by_id(id)   → the book, or None when absent
    - insert(fields)   → a new book with a store-generated 24-hex id
    - save(book)       → persists in-place changes made to a loaded book
    - delete(book)     → removes the book
    - Driver failures are raised as StorageError carrying the driver message
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database import get_db_session
from bookshelf.exceptions import StorageError
from bookshelf.models.book import Book, new_book_id

logger = logging.getLogger(__name__)


class BookStore(ABC):
    """Persistence operations the book routes rely on."""

    @abstractmethod
    async def find_all(self) -> List[Book]:
        ...

    @abstractmethod
    async def find_by_id(self, book_id: str) -> Optional[Book]:
        """
        Look up one book.

        Returns:
            The stored book, or None when no record has this id.

        Raises:
            StorageError: The lookup itself failed.
        """
        ...

    @abstractmethod
    async def insert(self, fields: Dict[str, Any]) -> Book:
        """
        Persist a new book built from the four coerced fields.

        Returns:
            The stored book with its generated identifier.

        Raises:
            StorageError: The store rejected the write.
        """
        ...

    @abstractmethod
    async def save(self, book: Book) -> Book:
        ...

    @abstractmethod
    async def delete(self, book: Book) -> None:
        ...


class SQLAlchemyBookStore(BookStore):
    """
    BookStore over an async SQLAlchemy session.

    Every write commits immediately so each operation is all-or-nothing;
    a failed commit is rolled back before the error is re-raised.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[Book]:
        try:
            result = await self.session.execute(select(Book).order_by(Book.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing books: %s", str(e))
            raise StorageError(message=str(e), context={"operation": "find_all"}) from e

    async def find_by_id(self, book_id: str) -> Optional[Book]:
        try:
            return await self.session.get(Book, book_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching book %s: %s", book_id, str(e))
            raise StorageError(
                message=str(e),
                context={"operation": "find_by_id", "book_id": book_id},
            ) from e

    async def insert(self, fields: Dict[str, Any]) -> Book:
        book = Book(id=new_book_id(), **fields)
        self.session.add(book)
        await self._commit("insert", book)
        return book

    async def save(self, book: Book) -> Book:
        # The book was loaded through this session, so it is already tracked
        self.session.add(book)
        await self._commit("save", book)
        return book

    async def delete(self, book: Book) -> None:
        book_id = book.id
        try:
            await self.session.delete(book)
        except SQLAlchemyError as e:
            raise StorageError(
                message=str(e),
                context={"operation": "delete", "book_id": book_id},
            ) from e
        await self._commit("delete", book)

    async def _commit(self, operation: str, book: Book) -> None:
        # Read before committing: a rollback expires loaded attributes
        book_id = book.id
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database error during %s of book %s: %s", operation, book_id, str(e))
            raise StorageError(
                message=str(e),
                context={"operation": operation, "book_id": book_id},
            ) from e


async def get_book_store(
    session: AsyncSession = Depends(get_db_session),
) -> BookStore:
    """
    FastAPI dependency providing the request's BookStore.

    Cached per request by FastAPI, so resolve_book and the route handler
    share one store (and one session).
    """
    return SQLAlchemyBookStore(session)
