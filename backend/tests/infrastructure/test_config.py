"""Settings — environment overrides and URL normalisation."""

from bookshelf.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 5000
    assert settings.database_url.startswith("postgresql+asyncpg://")


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings(_env_file=None).port == 8080


def test_plain_postgres_url_gets_async_driver(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/books")
    assert Settings(_env_file=None).database_url == (
        "postgresql+asyncpg://u:p@db:5432/books"
    )
