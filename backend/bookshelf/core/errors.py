"""Error Hierarchy — typed, categorized exceptions for every Bookshelf failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), http_status (int)
    - to_response() always produces the uniform envelope {"message": str}
    - PersistenceError carries the driver message through unchanged

Design Decisions:
    - Single hierarchy with BookshelfError base: FastAPI global handler and the
      resource outcome mapping both read http_status (ADR: uniform error shape)
    - PersistenceError status is chosen by the caller: the same driver failure is
      a 400 on writes and a 500 on reads
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for logging and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERSISTENCE = "persistence"


@dataclass
class ErrorContext:
    """Observability context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    book_id: str | None = None
    operation: str | None = None


class BookshelfError(Exception):
    """Base exception for all Bookshelf errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the uniform REST error body."""
        return {"message": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class BookValidationError(BookshelfError):
    """Candidate record failed a field constraint."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            context, 400,
        )
        self.field = field


class BookNotFoundError(BookshelfError):
    """No book exists with the requested id."""
    def __init__(self, book_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.book_id = book_id
        super().__init__(
            "Book not found", "BOOK_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ctx, 404,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class PersistenceError(BookshelfError):
    """The backing store rejected or failed an operation."""
    def __init__(
        self,
        message: str,
        operation: str,
        http_status: int = 500,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ctx, http_status,
        )
        self.operation = operation

    def with_status(self, http_status: int) -> "PersistenceError":
        """Same failure, surfaced with a different HTTP status."""
        return PersistenceError(
            self.message, self.operation, http_status, self.context,
        )
