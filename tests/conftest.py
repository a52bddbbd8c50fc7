"""
Pytest configuration and fixtures.

Provides:
- a migrated SQLite store in a temporary directory
- a store double that fails every call
- a FastAPI test client backed by its own temporary database
"""

import os

# Keep password hashing fast; must be set before the settings module loads.
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest
from fastapi.testclient import TestClient

from records_api.app.core.db import SqliteStore, init_db
from records_api.app.main import create_app
from tests.helpers import FailingStore


@pytest.fixture
def store(tmp_path) -> SqliteStore:
    db_path = str(tmp_path / "records.db")
    init_db(db_path)
    return SqliteStore(db_path)


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def app(tmp_path):
    return create_app(database_path=str(tmp_path / "api.db"), static_dir="")


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
