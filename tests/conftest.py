"""
Bookshelf API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview (all function-scoped):
    ├── memory_store: InMemoryBookStore fake (no database needed)
    ├── test_client: HTTPX AsyncClient, app wired to memory_store
    ├── sqlite_session_factory: in-memory SQLite with the books table
    ├── sql_store: SQLAlchemyBookStore on that database
    ├── sql_client: HTTPX AsyncClient, app wired to the SQLite database
    └── sample_book_data: request body for a valid book
"""

import os
from typing import Any, Dict, List, Optional, Set

# Override settings for testing BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BOOKS_PREFIX"] = "/books"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db_session
from bookshelf.exceptions import StorageError
from bookshelf.models.book import BOOK_FIELDS, Book, new_book_id
from bookshelf.services.book_store import BookStore, SQLAlchemyBookStore, get_book_store


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Store
# ══════════════════════════════════════════════════════════════════════════

class InMemoryBookStore(BookStore):
    """
    BookStore fake keeping books as plain dicts.

    Every read hands out a fresh Book instance, so in-place edits only reach
    the store through save(), as with a real database.

    Attributes:
        calls:    Names of the operations invoked, in order
        fail_on:  Operation names that raise StorageError("boom")
    """

    def __init__(self):
        self._rows: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.fail_on: Set[str] = set()

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StorageError(message="boom", context={"operation": operation})

    @staticmethod
    def _to_book(row: Dict[str, Any]) -> Book:
        return Book(**row)

    def rows(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in self._rows.values()]

    async def find_all(self) -> List[Book]:
        self._enter("find_all")
        return [self._to_book(row) for _, row in sorted(self._rows.items())]

    async def find_by_id(self, book_id: str) -> Optional[Book]:
        self._enter("find_by_id")
        row = self._rows.get(book_id)
        return self._to_book(row) if row else None

    async def insert(self, fields: Dict[str, Any]) -> Book:
        self._enter("insert")
        row = {"id": new_book_id(), **fields}
        self._rows[row["id"]] = row
        return self._to_book(row)

    async def save(self, book: Book) -> Book:
        self._enter("save")
        self._rows[book.id] = {"id": book.id, **{name: getattr(book, name) for name in BOOK_FIELDS}}
        return book

    async def delete(self, book: Book) -> None:
        self._enter("delete")
        self._rows.pop(book.id, None)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryBookStore()


@pytest.fixture
def sample_book_data():
    """Request body for a valid book."""
    return {
        "title": "Dune",
        "author": "Herbert",
        "genre": "SciFi",
        "publication_date": "1965-01-01",
    }


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to a fresh app whose BookStore is memory_store.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/books")
    """
    from bookshelf.main import create_app

    app = create_app()
    app.dependency_overrides[get_book_store] = lambda: memory_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_session_factory():
    """
    Session factory bound to a private in-memory SQLite database.

    StaticPool keeps one connection, so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def sql_store(sqlite_session_factory):
    async with sqlite_session_factory() as session:
        yield SQLAlchemyBookStore(session)


@pytest_asyncio.fixture
async def sql_client(sqlite_session_factory):
    """HTTPX AsyncClient whose app uses the real store over SQLite."""
    from bookshelf.main import create_app

    async def override_session():
        async with sqlite_session_factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
