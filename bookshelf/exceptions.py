"""
Bookshelf API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the book resource.
How:   Each exception carries a human-readable message and an optional
       context dict. Global handlers (registered in main.py) turn them into
       JSON error responses with the matching HTTP status code.
Who:   Raised by the book service and the storage layer.

Exception Hierarchy:
    BookshelfError (base)
    ├── ValidationError            → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    │   └── InvalidBookIdError     → 404 Not Found (malformed identifier)
    └── StorageError               → 500 Internal Server Error (read/delete)
        └── PersistenceError       → 400 Bad Request (create/update rejected)

Messages are returned to the client verbatim, including the raw message of
storage failures.
"""

from typing import Any, Dict, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, not returned)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookshelfError):
    """
    Raised when the request body fails the route's business rules.

    When:    POST without all four book fields, PATCH without any field.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(BookshelfError):
    """
    Raised when no book exists for a well-formed identifier.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "El Libro no fue encontrado",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class InvalidBookIdError(NotFoundError):
    """
    Raised when the path identifier is not 24 hexadecimal characters.

    The check runs before the store is touched, so no lookup is attempted.
    HTTP:    404 Not Found
    """

    def __init__(self, resource_id: Optional[str] = None):
        super().__init__(
            message="El ID del libro no es válido",
            resource_id=resource_id,
        )


class StorageError(BookshelfError):
    """
    Raised when the underlying database operation fails.

    What:    Query, insert, update or delete failed in the driver.
    HTTP:    500 Internal Server Error
    Message: The driver's own message, passed through unchanged.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(StorageError):
    """
    Raised when a create or update is rejected while saving.

    When:    Type coercion of a field fails, or the store refuses the write.
    HTTP:    400 Bad Request
    """

    status_code = 400
