"""Book Resource — the five CRUD operations as status-code + JSON body pairs.

Invariants:
    - Validation always precedes persistence for create/update
    - Each operation performs at most one repository call (no retry)
    - Every PersistenceError becomes an Err outcome, then a response — never escapes
    - Reads and deletes surface persistence failures as 500, writes as 400
    - A malformed id cannot name a book: 404 without touching the repository

Design Decisions:
    - Repository injected at construction (ADR: lifecycle owned by the app, not the core)
    - Returns ResourceResponse instead of FastAPI objects: routes stay one-liners
      and the status table is testable without HTTP
"""

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from bookshelf.core.domain_types import Err, Ok, Outcome, parse_book_id
from bookshelf.core.errors import (
    BookNotFoundError, BookshelfError, PersistenceError,
)
from bookshelf.core.repository_protocols import BookRepository
from bookshelf.core.validate_book import validate_book
from bookshelf.schemas.book import book_document

logger = logging.getLogger(__name__)

T = TypeVar("T")

READ_FAILURE_STATUS = 500
WRITE_FAILURE_STATUS = 400


@dataclass(frozen=True)
class ResourceResponse:
    """HTTP status plus JSON-ready body."""
    status_code: int
    body: Any


async def attempt(call: Awaitable[T]) -> Outcome[T]:
    """Await a repository call, capturing PersistenceError as Err."""
    try:
        return Ok(await call)
    except PersistenceError as e:
        return Err(e)


def _error(error: BookshelfError) -> ResourceResponse:
    return ResourceResponse(error.http_status, error.to_response())


def _not_found(raw_id: str) -> ResourceResponse:
    logger.warning(f"Book {raw_id} not found", extra={"book_id": raw_id})
    return _error(BookNotFoundError(raw_id))


class BookResource:
    """CRUD handler over an injected BookRepository."""

    def __init__(self, repository: BookRepository):
        self._repository = repository

    async def list_books(self, criteria: Mapping[str, str]) -> ResourceResponse:
        outcome = await attempt(self._repository.find(criteria))
        if isinstance(outcome, Err):
            return _error(outcome.error.with_status(READ_FAILURE_STATUS))
        return ResourceResponse(200, [book_document(b) for b in outcome.value])

    async def get_book(self, raw_id: str) -> ResourceResponse:
        book_id = parse_book_id(raw_id)
        if book_id is None:
            return _not_found(raw_id)
        outcome = await attempt(self._repository.get(book_id))
        if isinstance(outcome, Err):
            return _error(outcome.error.with_status(READ_FAILURE_STATUS))
        if outcome.value is None:
            return _not_found(raw_id)
        return ResourceResponse(200, book_document(outcome.value))

    async def create_book(self, candidate: Mapping[str, Any]) -> ResourceResponse:
        validated = validate_book(candidate)
        if isinstance(validated, Err):
            logger.warning(f"Book rejected: {validated.error.message}")
            return _error(validated.error)
        outcome = await attempt(self._repository.insert(validated.value))
        if isinstance(outcome, Err):
            return _error(outcome.error.with_status(WRITE_FAILURE_STATUS))
        logger.info(
            f"Book {outcome.value.id} created",
            extra={"book_id": str(outcome.value.id)},
        )
        return ResourceResponse(201, book_document(outcome.value))

    async def update_book(
        self, raw_id: str, candidate: Mapping[str, Any],
    ) -> ResourceResponse:
        """Full replacement: all five fields are required."""
        validated = validate_book(candidate)
        if isinstance(validated, Err):
            logger.warning(
                f"Book {raw_id} update rejected: {validated.error.message}",
                extra={"book_id": raw_id},
            )
            return _error(validated.error)
        book_id = parse_book_id(raw_id)
        if book_id is None:
            return _not_found(raw_id)
        outcome = await attempt(
            self._repository.replace(book_id, validated.value),
        )
        if isinstance(outcome, Err):
            return _error(outcome.error.with_status(WRITE_FAILURE_STATUS))
        if outcome.value is None:
            return _not_found(raw_id)
        return ResourceResponse(200, book_document(outcome.value))

    async def delete_book(self, raw_id: str) -> ResourceResponse:
        book_id = parse_book_id(raw_id)
        if book_id is None:
            return _not_found(raw_id)
        outcome = await attempt(self._repository.delete(book_id))
        if isinstance(outcome, Err):
            return _error(outcome.error.with_status(READ_FAILURE_STATUS))
        if outcome.value is None:
            return _not_found(raw_id)
        logger.info(f"Book {raw_id} deleted", extra={"book_id": raw_id})
        return ResourceResponse(200, {"message": "Book deleted"})
