"""Book ORM — the single persisted document type.

Invariants:
    - id is UUID primary key, generated on insert, never updated
    - The five Book columns are non-nullable; their constraints are enforced
      by the validator, not the table
    - created_at is internal (list ordering only), never serialized

Design Decisions:
    - String(255) mirrors the validator's upper bound so PostgreSQL rejects
      anything that bypassed validation
    - Date column for published_date: ISO date round-trips exactly
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from bookshelf.db.base import Base


class Book(Base):
    """Book row."""
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    published_date: Mapped[date] = mapped_column(Date, nullable=False)
    pages: Mapped[int] = mapped_column(Integer, nullable=False)
    genre: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
