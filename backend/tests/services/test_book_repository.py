"""Book Repository — SQLAlchemy persistence against in-memory SQLite.

Invariants:
    - insert assigns an id; get finds it; delete removes it
    - replace keeps the id and overwrites all five fields
    - Missing rows come back as None, never as an exception
    - build_filter ignores unknown keys and raises PersistenceError on bad values
"""

from datetime import date
from uuid import uuid4

import pytest

from bookshelf.core.errors import PersistenceError
from bookshelf.infrastructure.book_repository import (
    SqlAlchemyBookRepository, build_filter,
)
from bookshelf.schemas.book import BookFields
from tests.factories import dune


@pytest.fixture
def repository(test_db):
    return SqlAlchemyBookRepository(test_db)


async def test_insert_assigns_id(repository):
    book = await repository.insert(BookFields.model_validate(dune()))
    assert book.id is not None
    assert book.published_date == date(1965, 6, 1)

    fetched = await repository.get(book.id)
    assert fetched.title == "Dune"


async def test_replace_keeps_id(repository):
    book = await repository.insert(BookFields.model_validate(dune()))
    replaced = await repository.replace(
        book.id, BookFields.model_validate(dune(pages=500, genre="Space Opera")),
    )
    assert replaced.id == book.id
    assert replaced.pages == 500
    assert replaced.genre == "Space Opera"


async def test_missing_rows_are_none(repository):
    fields = BookFields.model_validate(dune())
    assert await repository.get(uuid4()) is None
    assert await repository.replace(uuid4(), fields) is None
    assert await repository.delete(uuid4()) is None


async def test_delete_removes_row(repository):
    book = await repository.insert(BookFields.model_validate(dune()))
    assert await repository.delete(book.id) is not None
    assert await repository.get(book.id) is None


async def test_find_without_criteria_returns_everything(repository):
    await repository.insert(BookFields.model_validate(dune()))
    await repository.insert(BookFields.model_validate(dune(title="Emma", genre="Novel")))
    assert len(await repository.find({})) == 2


def test_build_filter_ignores_unknown_keys():
    assert build_filter({"sort": "title", "limit": "5"}) == []


def test_build_filter_one_clause_per_known_key():
    clauses = build_filter({"title": "Dune", "publishedDate": "1965-06-01"})
    assert len(clauses) == 2


async def test_integer_overflow_surfaces_as_persistence_error(repository):
    oversized = BookFields.model_construct(
        title="Dune", author="Herbert", published_date=date(1965, 6, 1),
        pages=10**30, genre="SciFi",
    )
    with pytest.raises(PersistenceError) as exc_info:
        await repository.insert(oversized)
    assert exc_info.value.operation == "insert"
    assert await repository.find({}) == []


def test_build_filter_rejects_out_of_range_integer():
    with pytest.raises(PersistenceError) as exc_info:
        build_filter({"pages": str(10**30)})
    assert '"pages"' in exc_info.value.message


def test_build_filter_rejects_uncoercible_value():
    with pytest.raises(PersistenceError) as exc_info:
        build_filter({"publishedDate": "yesterday"})
    assert exc_info.value.operation == "find"
    assert '"publishedDate"' in exc_info.value.message
