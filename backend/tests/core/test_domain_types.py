"""Domain Types — identity parsing, field names, and outcome values.

Tests:
    - parse_book_id accepts UUID strings and rejects everything else
    - BookField lists the public names in validation order
    - Ok/Err are value objects
"""

from uuid import uuid4

from bookshelf.core.domain_types import BookField, Err, Ok, parse_book_id
from bookshelf.core.errors import BookNotFoundError


def test_parse_book_id_accepts_uuid_string():
    uid = uuid4()
    assert parse_book_id(str(uid)) == uid


def test_parse_book_id_rejects_garbage():
    assert parse_book_id("64b7f0c2e4b0a1a2b3c4d5e6") is None
    assert parse_book_id("") is None


def test_book_field_order():
    assert [f.value for f in BookField] == [
        "title", "author", "publishedDate", "pages", "genre",
    ]


def test_outcomes_compare_by_value():
    assert Ok(3) == Ok(3)
    error = BookNotFoundError("x")
    assert Err(error) == Err(error)
    assert Ok(3) != Err(error)
