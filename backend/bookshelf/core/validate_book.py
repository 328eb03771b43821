"""Book Validation — pure mapping from a candidate record to BookFields or an error.

Invariants:
    - PURE: no IO, no async, no DB, never raises for malformed input
    - Checks title, author, publishedDate, pages, genre, then unknown keys
    - First failing check wins; its message names the field and the constraint

Design Decisions:
    - Pydantic does the checking, this module only picks the first error and
      words it (ADR: one source of truth for constraints in schemas/book.py)
    - Return an Outcome (not raise): the resource handler branches on it before
      any persistence call
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from bookshelf.core.domain_types import Err, Ok
from bookshelf.core.errors import BookValidationError
from bookshelf.schemas.book import BookFields


def validate_book(candidate: Mapping[str, Any]) -> Ok[BookFields] | Err[BookValidationError]:
    """Validate a candidate record. Returns Ok(BookFields) or Err(BookValidationError)."""
    if not isinstance(candidate, Mapping):
        return Err(BookValidationError('"value" must be of type object', "value"))
    try:
        return Ok(BookFields.model_validate(dict(candidate)))
    except ValidationError as exc:
        first = exc.errors()[0]
        field = _field_name(first)
        return Err(BookValidationError(format_error(field, first), field))


def _field_name(error: dict) -> str:
    loc = error.get("loc") or ()
    return str(loc[0]) if loc else "value"


def format_error(field: str, error: dict) -> str:
    """Word a single pydantic error the way API clients see it."""
    kind = error["type"]
    ctx = error.get("ctx") or {}
    name = f'"{field}"'

    if kind == "missing":
        return f"{name} is required"
    if kind == "extra_forbidden":
        return f"{name} is not allowed"
    if kind == "string_type":
        return f"{name} must be a string"
    if kind == "string_too_short":
        if error.get("input") == "":
            return f"{name} is not allowed to be empty"
        return f"{name} length must be at least {ctx['min_length']} characters long"
    if kind == "string_too_long":
        return (
            f"{name} length must be less than or equal to "
            f"{ctx['max_length']} characters long"
        )
    if kind == "int_from_float":
        return f"{name} must be an integer"
    if kind.startswith(("int_", "float_")) or kind == "finite_number":
        return f"{name} must be a number"
    if kind == "greater_than_equal":
        return f"{name} must be greater than or equal to {ctx['ge']}"
    if kind == "less_than_equal":
        return f"{name} must be less than or equal to {ctx['le']}"
    if kind.startswith("date"):
        return f"{name} must be a valid date"
    return f"{name} {error['msg']}"
