"""Integration fixtures: the real app wired to the PostgreSQL test database."""

from collections.abc import Generator
from unittest.mock import patch

import pytest
from fastapi import FastAPI

from core.database import Database, get_database


@pytest.fixture(autouse=True)
def _disable_rate_limiter() -> Generator[None]:
    with patch("core.ratelimit.limiter.enabled", False):
        yield


@pytest.fixture
def app(pg_db: Database) -> Generator[FastAPI]:
    """Overrides the root ``app`` fixture so ``client`` talks to PostgreSQL."""
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_database] = lambda: pg_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
