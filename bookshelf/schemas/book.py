"""
Bookshelf API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract for the books resource.
How:   FastAPI uses these models to parse request bodies, serialize
       responses, and generate the OpenAPI documentation.

Request bodies are deliberately loose (every field optional, any JSON type)
so that the routes, not FastAPI's automatic 422 handling, decide what a
missing field means. Typed coercion happens afterwards in BookFields.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bookshelf.models.book import BOOK_FIELDS


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookPayload(BaseModel):
    """
    What:  Body of POST, PUT and PATCH requests.
    How:   Unknown keys are ignored and a body that is not a JSON object
           reads as empty. A field counts as supplied only when its
           value is truthy, so `""`, `0`, `false` and `null` all mean
           "not supplied".
    """
    title: Optional[Any] = Field(default=None, description="Book title")
    author: Optional[Any] = Field(default=None, description="Author name")
    genre: Optional[Any] = Field(default=None, description="Literary genre")
    publication_date: Optional[Any] = Field(
        default=None,
        description="Publication date (ISO 8601, e.g. 1965-01-01)",
    )

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def non_object_body_is_empty(cls, data: Any) -> Any:
        """A JSON array, string or number carries no book fields."""
        if isinstance(data, (dict, BaseModel)):
            return data
        return {}

    def supplied(self) -> Dict[str, Any]:
        """Return only the fields carrying a truthy value."""
        return {
            name: getattr(self, name)
            for name in BOOK_FIELDS
            if getattr(self, name)
        }

    def missing(self) -> List[str]:
        return [name for name in BOOK_FIELDS if not getattr(self, name)]


class BookFields(BaseModel):
    """
    What:  Typed view of the four book fields, used to coerce values before
           they reach the store.
    How:   Numbers are accepted for the string fields and stringified;
           publication_date accepts ISO dates or midnight datetimes.
    """
    title: str
    author: str
    genre: str
    publication_date: date

    model_config = ConfigDict(coerce_numbers_to_str=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookResponse(BaseModel):
    """A stored book as returned by every successful book route."""
    id: str = Field(description="24-character hexadecimal identifier")
    title: str
    author: str
    genre: str
    publication_date: date = Field(description="Publication date (YYYY-MM-DD)")

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Confirmation body, e.g. after a delete."""
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "El Libro no fue encontrado",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
