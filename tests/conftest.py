"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from todo_service.config import Settings
from todo_service.db.database import Database


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "live: mark test as requiring a running server")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--live-url",
        action="store",
        default=None,
        help="Base URL of a running todo-service to run live tests against",
    )


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --live-url is provided."""
    if config.getoption("--live-url"):
        return

    skip_live = pytest.mark.skip(reason="Need --live-url option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def live_url(request) -> str:
    return request.config.getoption("--live-url").rstrip("/")


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db(db_url):
    """Migrated Database backed by a fresh SQLite file."""
    database = Database(db_url)
    database.init()
    yield database
    database.close()


@pytest.fixture
def make_settings(db_url):
    def _make(**overrides) -> Settings:
        values = {"DATABASE_URL": db_url}
        values.update(overrides)
        return Settings(**values)
    return _make


@pytest.fixture
def make_client(make_settings):
    """Factory for a started TestClient; startup runs migrations."""
    clients: list[TestClient] = []

    def _make(**overrides) -> TestClient:
        from server.app import create_app
        client = TestClient(create_app(make_settings(**overrides)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
