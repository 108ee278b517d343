from __future__ import annotations

import pytest

from birthday_greeter.core.config import ConfigurationError, Settings, get_settings


def test_reads_postgres_dsn(monkeypatch):
    monkeypatch.setenv("POSTGRES_DSN", "postgres://greeter:secret@db:5432/greeter")
    settings = get_settings()
    assert settings.database_url == "postgres://greeter:secret@db:5432/greeter"
    assert settings.async_database_url == "postgresql+asyncpg://greeter:secret@db:5432/greeter"
    assert settings.port == 8080
    assert settings.host == "0.0.0.0"


def test_prefixed_aliases(monkeypatch):
    monkeypatch.setenv("GREETER_DATABASE_URL", "postgresql://localhost/greeter")
    monkeypatch.setenv("GREETER_ENV", "Production")
    monkeypatch.setenv("GREETER_PORT", "9090")
    settings = get_settings()
    assert settings.async_database_url == "postgresql+asyncpg://localhost/greeter"
    assert settings.environment_lower == "production"
    assert settings.port == 9090


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("POSTGRES_DSN=postgresql://from-dotenv/greeter\n")
    assert get_settings().database_url == "postgresql://from-dotenv/greeter"


@pytest.mark.parametrize("value", [None, ""])
def test_missing_dsn_is_a_configuration_error(monkeypatch, value):
    if value is not None:
        monkeypatch.setenv("POSTGRES_DSN", value)
    with pytest.raises(ConfigurationError, match="environment variable POSTGRES_DSN is not set"):
        get_settings()


@pytest.mark.parametrize(
    "url",
    ["postgresql+asyncpg://localhost/greeter", "sqlite+aiosqlite:///./greeter.db"],
)
def test_driver_urls_pass_through(url):
    assert Settings(database_url=url).async_database_url == url
