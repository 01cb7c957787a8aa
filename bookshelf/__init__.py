"""
Bookshelf API — Application Package Initializer
=================================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, field merge
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        BookStore (Persistence)      │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Routes never touch the database directly: they go through BookService,
which talks to whichever BookStore the request was given.
"""

__version__ = "1.0.0"
