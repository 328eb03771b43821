"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Not-found is a None return, failure is a raised PersistenceError: the
      resource handler owns the translation of both into responses
"""

from collections.abc import Mapping
from datetime import date
from typing import Protocol

from bookshelf.core.domain_types import BookId
from bookshelf.schemas.book import BookFields


class BookLike(Protocol):
    """Structural contract for persisted Book rows handed back by a repository."""
    id: BookId
    title: str
    author: str
    published_date: date
    pages: int
    genre: str


class BookRepository(Protocol):
    """Contract for book persistence — implemented by shell."""
    async def find(self, criteria: Mapping[str, str]) -> list[BookLike]: ...
    async def get(self, book_id: BookId) -> BookLike | None: ...
    async def insert(self, fields: BookFields) -> BookLike: ...
    async def replace(self, book_id: BookId, fields: BookFields) -> BookLike | None: ...
    async def delete(self, book_id: BookId) -> BookLike | None: ...
