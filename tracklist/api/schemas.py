"""
API Schemas for Tracklist

Pydantic models for request validation and response serialization:
- Todo models
- Anime models
- Book models
- Error / health models

Design Decisions:
1. Strict validation: every body is checked against a schema before use,
   and unknown fields are rejected
2. Separate Request/Response: clear distinction between inputs and outputs
3. Partial updates: update models carry ``id`` plus optional fields, and
   ``changes()`` reports only the fields the caller actually supplied
"""

from datetime import datetime
from typing import Annotated, Optional, Any
from enum import Enum

from pydantic import (
    BaseModel,
    Field,
    StrictBool,
    StrictInt,
    field_validator,
    model_validator,
    ConfigDict,
)


# =============================================================================
# Helpers
# =============================================================================

# Largest value a 64-bit signed INTEGER column holds
MAX_RECORD_ID = 2**63 - 1

RecordId = Annotated[StrictInt, Field(ge=1, le=MAX_RECORD_ID)]


def _require_text(value: Optional[str]) -> Optional[str]:
    """Trim text fields and reject empty or whitespace-only values."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class RequestModel(BaseModel):
    """Base for request bodies: unknown fields are a client error."""

    model_config = ConfigDict(extra="forbid")


class UpdateModel(RequestModel):
    """Base for partial update bodies."""

    id: RecordId

    def changes(self) -> dict[str, Any]:
        """Mutable fields explicitly supplied with a non-null value."""
        return self.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)


# =============================================================================
# Enums
# =============================================================================

class AnimeStatus(str, Enum):
    """Anime watch status."""
    PLAN_TO_WATCH = "plan_to_watch"
    WATCHING = "watching"
    COMPLETED = "completed"


# =============================================================================
# Todo Schemas
# =============================================================================

class TodoCreate(RequestModel):
    """Todo creation request."""

    text: str = Field(..., max_length=2000)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value):
        return _require_text(value)

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"text": "Learn the system"}},
    )


class TodoUpdate(UpdateModel):
    """
    Todo update request (partial).

    ``completed`` sets the value; ``toggle`` asks the store to invert it.
    """

    text: Optional[str] = Field(None, max_length=2000)
    completed: Optional[StrictBool] = None
    toggle: Optional[StrictBool] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value):
        return _require_text(value)

    @model_validator(mode="after")
    def check_toggle_or_set(self) -> "TodoUpdate":
        if self.toggle and self.completed is not None:
            raise ValueError("send either 'completed' or 'toggle', not both")
        return self

    def changes(self) -> dict[str, Any]:
        changes = super().changes()
        # toggle=false means "don't toggle"
        if not changes.get("toggle"):
            changes.pop("toggle", None)
        return changes


class TodoResponse(BaseModel):
    """Todo response model."""

    id: int
    text: str
    completed: bool = False

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Anime Schemas
# =============================================================================

class AnimeCreate(RequestModel):
    """Anime entry creation request."""

    title: str = Field(..., max_length=500)
    status: AnimeStatus = AnimeStatus.PLAN_TO_WATCH
    score: Optional[float] = Field(None, ge=0, le=10)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _require_text(value)

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Frieren",
                "status": "watching",
                "score": 9.5,
            }
        },
    )


class AnimeUpdate(UpdateModel):
    """Anime entry update request (partial)."""

    title: Optional[str] = Field(None, max_length=500)
    status: Optional[AnimeStatus] = None
    score: Optional[float] = Field(None, ge=0, le=10)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _require_text(value)

    def changes(self) -> dict[str, Any]:
        changes = super().changes()
        if "status" in changes:
            changes["status"] = AnimeStatus(changes["status"]).value
        return changes


class AnimeResponse(BaseModel):
    """Anime entry response model."""

    id: int
    title: str
    status: AnimeStatus
    score: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Book Schemas
# =============================================================================

class BookResponse(BaseModel):
    """Book response model."""

    id: int
    title: str
    author: str
    rating: Optional[float] = None
    price: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Shared Schemas
# =============================================================================

class DeleteRequest(RequestModel):
    """Delete request body, used when ``id`` is not in the query string."""

    id: RecordId


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    code: str
    detail: Optional[str] = None
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    components: dict[str, str] = Field(default_factory=dict)
