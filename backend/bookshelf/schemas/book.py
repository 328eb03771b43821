"""Book Schemas — Pydantic field constraints and the public JSON document shape.

Invariants:
    - BookFields: title/author/genre 3-255 chars, pages 1..PAGES_MAX (never a
      boolean), publishedDate a date
    - BookFields rejects unknown keys (extra="forbid")
    - Field declaration order is the validation order (first error wins)
    - book_document() is the only place a Book row becomes JSON

Design Decisions:
    - Alias only for publishedDate: the JSON contract is camelCase, Python stays snake_case
    - Timestamps ("T" or space separated) accepted for publishedDate; the calendar date is kept
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

# Largest value the INTEGER column holds on every supported backend
PAGES_MAX = 2**31 - 1


class BookFields(BaseModel):
    """The five validated Book fields (no id)."""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=3, max_length=255)
    author: str = Field(min_length=3, max_length=255)
    published_date: date = Field(alias="publishedDate")
    pages: int = Field(ge=1, le=PAGES_MAX)
    genre: str = Field(min_length=3, max_length=255)

    @field_validator("published_date", mode="before")
    @classmethod
    def truncate_timestamp(cls, v: Any) -> Any:
        if isinstance(v, str) and ("T" in v or " " in v):
            try:
                return datetime.fromisoformat(v).date()
            except ValueError:
                return v
        return v

    @field_validator("pages", mode="before")
    @classmethod
    def reject_boolean(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return v

    def to_document(self) -> dict:
        """JSON-ready dict using the public field names."""
        return self.model_dump(mode="json", by_alias=True)


def book_document(book: Any) -> dict:
    """Serialize a persisted Book row."""
    return {
        "id": str(book.id),
        "title": book.title,
        "author": book.author,
        "publishedDate": book.published_date.isoformat(),
        "pages": book.pages,
        "genre": book.genre,
    }
