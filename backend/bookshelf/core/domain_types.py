"""Domain Types — identity, field names, and the explicit outcome type.

Invariants:
    - BookId wraps UUID — never use bare UUID in domain logic
    - BookField values are the public JSON names, in validation order
    - Outcome is Ok(value) or Err(error); no third state

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Ok/Err as frozen dataclasses: callers branch with isinstance, errors stay
      values until the resource boundary turns them into responses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NewType, TypeVar, Union
from uuid import UUID

from bookshelf.core.errors import BookshelfError


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class BookField(str, Enum):
    """Public Book field names, in the order the validator checks them."""
    TITLE = "title"
    AUTHOR = "author"
    PUBLISHED_DATE = "publishedDate"
    PAGES = "pages"
    GENRE = "genre"


# ─── Outcome ─────────────────────────────────────────────────────

T = TypeVar("T")
E = TypeVar("E", bound=BookshelfError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying a typed error."""
    error: E


Outcome = Union[Ok[T], Err[BookshelfError]]


def parse_book_id(raw: str) -> BookId | None:
    """Parse a path id; None when it cannot name any book."""
    try:
        return BookId(UUID(str(raw)))
    except ValueError:
        return None
