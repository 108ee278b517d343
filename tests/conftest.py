import os
import time
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from birthday_greeter.core.config import Settings, get_settings
from birthday_greeter.main import create_app

FIXED_NOW = datetime(2024, 3, 10, 15, 30)


def _apply_timezone(name: str | None) -> None:
    if name is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = name
    time.tzset()


@pytest.fixture(autouse=True, scope="session")
def utc_local_time():
    """Naive datetimes in tests are read as UTC unless a test picks another zone."""
    if not hasattr(time, "tzset"):
        yield
        return
    previous = os.environ.get("TZ")
    _apply_timezone("UTC")
    yield
    _apply_timezone(previous)


@pytest.fixture()
def local_timezone(utc_local_time):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    yield _apply_timezone
    _apply_timezone("UTC")


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    for key in list(os.environ.keys()):
        if key.startswith("GREETER_") or key in {"DATABASE_URL", "ENVIRONMENT"}:
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("POSTGRES_DSN", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def db_path(tmp_path) -> Path:
    return tmp_path / "greeter_test.db"


@pytest.fixture()
def database_url(db_path) -> str:
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture()
def settings(database_url) -> Settings:
    return Settings(database_url=database_url, environment="test", log_level="debug")


@pytest.fixture()
def client(settings):
    app = create_app(settings, clock=lambda: FIXED_NOW)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def make_client(settings):
    """Build clients pinned to an arbitrary wall-clock time, sharing one database."""
    clients: list[TestClient] = []

    def _make(now: datetime) -> TestClient:
        client = TestClient(create_app(settings, clock=lambda: now))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
