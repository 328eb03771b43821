"""Book Repository — SQLAlchemy implementation of the BookRepository protocol.

Invariants:
    - The only module that issues queries against the books table
    - Each method runs at most one commit; nothing is retried
    - Driver failures (SQLAlchemyError, OSError, OverflowError) roll back and
      surface as PersistenceError carrying the driver message
    - Integer filter values outside the INTEGER column range fail as a cast
    - Not-found is a None return, never an exception

Design Decisions:
    - List filter is an allow-list of public field names with per-column coercion;
      unknown keys are ignored, uncoercible values fail the query
    - Rows ordered by created_at so listing follows insertion order
"""

import logging
from collections.abc import Callable, Mapping
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, AsyncGenerator
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.domain_types import BookField, BookId
from bookshelf.core.errors import PersistenceError
from bookshelf.models.book import Book
from bookshelf.schemas.book import PAGES_MAX, BookFields

logger = logging.getLogger(__name__)

_FILTERABLE: dict[str, tuple[Any, Callable[[str], Any], str]] = {
    "id": (Book.id, UUID, "UUID"),
    BookField.TITLE: (Book.title, str, "string"),
    BookField.AUTHOR: (Book.author, str, "string"),
    BookField.PUBLISHED_DATE: (Book.published_date, date.fromisoformat, "date"),
    BookField.PAGES: (Book.pages, int, "integer"),
    BookField.GENRE: (Book.genre, str, "string"),
}


def build_filter(criteria: Mapping[str, str]) -> list:
    """Translate query parameters into equality clauses."""
    clauses = []
    for key, raw in criteria.items():
        entry = _FILTERABLE.get(key)
        if entry is None:
            continue
        column, convert, type_name = entry
        try:
            value = convert(raw)
            if isinstance(value, int) and not -PAGES_MAX - 1 <= value <= PAGES_MAX:
                raise ValueError(raw)
        except (TypeError, ValueError):
            raise PersistenceError(
                f'Cast to {type_name} failed for value "{raw}" at path "{key}"',
                "find",
            )
        clauses.append(column == value)
    return clauses


class SqlAlchemyBookRepository:
    """Book persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except (SQLAlchemyError, OSError, OverflowError) as e:
            await self._db.rollback()
            message = str(e.orig) if isinstance(e, DBAPIError) else str(e)
            logger.error(
                f"Book {operation} failed: {message}",
                extra={"operation": operation},
            )
            raise PersistenceError(message, operation)

    async def find(self, criteria: Mapping[str, str]) -> list[Book]:
        query = (
            select(Book)
            .where(*build_filter(criteria))
            .order_by(Book.created_at)
        )
        async with self._guard("find"):
            result = await self._db.execute(query)
            return list(result.scalars().all())

    async def get(self, book_id: BookId) -> Book | None:
        async with self._guard("get"):
            return await self._db.get(Book, book_id)

    async def insert(self, fields: BookFields) -> Book:
        book = Book(**fields.model_dump())
        async with self._guard("insert"):
            self._db.add(book)
            await self._db.commit()
            await self._db.refresh(book)
        return book

    async def replace(self, book_id: BookId, fields: BookFields) -> Book | None:
        """Full replacement of the five fields; id is untouched."""
        async with self._guard("replace"):
            book = await self._db.get(Book, book_id)
            if book is None:
                return None
            for name, value in fields.model_dump().items():
                setattr(book, name, value)
            await self._db.commit()
            await self._db.refresh(book)
        return book

    async def delete(self, book_id: BookId) -> Book | None:
        async with self._guard("delete"):
            book = await self._db.get(Book, book_id)
            if book is None:
                return None
            await self._db.delete(book)
            await self._db.commit()
        return book
