"""
Bookshelf API — Book SQLAlchemy Model
=======================================

What:  ORM model representing the `books` table.
How:   Inherits from the shared DeclarativeBase; Alembic revision 001
       creates the matching table.
Who:   Used by SQLAlchemyBookStore and by the test fakes (as plain objects).

Identifier format:
    24 lowercase hexadecimal characters, shaped like a document-database
    ObjectId: 8 hex chars of the creation Unix timestamp followed by
    16 random hex chars. The timestamp prefix makes ordering by id
    follow creation order (to the second).
"""

import re
import secrets
import time
from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.database import Base

BOOK_ID_LENGTH = 24
BOOK_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

# The four client-writable fields, in the order they are reported to clients
BOOK_FIELDS = ("title", "author", "genre", "publication_date")


def new_book_id() -> str:
    """Generate a fresh ObjectId-style identifier."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_valid_book_id(value: str) -> bool:
    """True when `value` is exactly 24 hexadecimal characters (any case)."""
    return bool(BOOK_ID_PATTERN.fullmatch(value or ""))


class Book(Base):
    """
    A literary work record.

    Lifecycle:
        1. Inserted by POST with all four fields set
        2. Overwritten field-by-field by PUT / PATCH
        3. Removed by DELETE (no soft delete)
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(
        String(BOOK_ID_LENGTH),
        primary_key=True,
        default=new_book_id,
        comment="ObjectId-style identifier (24 hex chars)",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)

    publication_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Publication date (no time component)",
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
