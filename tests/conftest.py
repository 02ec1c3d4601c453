"""
Pytest fixtures for the issue tracker tests.

Every test runs against a fresh SQLite database file (aiosqlite driver for
the application, the stdlib driver for schema setup).
"""

import os
import sys
import tempfile
from pathlib import Path

# Point the application at a throwaway database BEFORE any app imports
_TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="issue_tracker_")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_PATH}"

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from app.database import models  # noqa: E402, F401
from app.database.config import AsyncSessionLocal, Base  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_schema():
    """Drop and recreate all tables before each test."""
    sync_engine = create_engine(f"sqlite:///{_TEST_DB_PATH}")
    try:
        Base.metadata.drop_all(sync_engine)
        Base.metadata.create_all(sync_engine)
    finally:
        sync_engine.dispose()
    yield


@pytest.fixture
def session_factory():
    return AsyncSessionLocal


@pytest_asyncio.fixture
async def db(session_factory):
    """An async session for service and repository calls."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as test_client:
        yield test_client
