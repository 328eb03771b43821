"""Service test fixtures — async DB + FastAPI test client + fake repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - fake_repository is an in-memory BookRepository that can be told to fail

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (ADR: PostgreSQL-specific features not exercised here)
    - Fake repository for failure paths: driver errors are hard to provoke on SQLite
"""

import uuid
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from bookshelf.core.errors import PersistenceError
from bookshelf.db.base import Base
from bookshelf.infrastructure.database import get_db, DatabaseSessionManager
import bookshelf.infrastructure.database as db_module
from bookshelf.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


class FakeBookRepository:
    """In-memory BookRepository. Set `failure` to make every call raise it."""

    def __init__(self):
        self.books: dict[uuid.UUID, SimpleNamespace] = {}
        self.calls: list[str] = []
        self.failure: PersistenceError | None = None

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.failure is not None:
            raise self.failure

    async def find(self, criteria):
        self._record("find")
        return list(self.books.values())

    async def get(self, book_id):
        self._record("get")
        return self.books.get(book_id)

    async def insert(self, fields):
        self._record("insert")
        book = SimpleNamespace(id=uuid.uuid4(), **fields.model_dump())
        self.books[book.id] = book
        return book

    async def replace(self, book_id, fields):
        self._record("replace")
        if book_id not in self.books:
            return None
        book = SimpleNamespace(id=book_id, **fields.model_dump())
        self.books[book_id] = book
        return book

    async def delete(self, book_id):
        self._record("delete")
        return self.books.pop(book_id, None)


@pytest.fixture
def fake_repository():
    return FakeBookRepository()
