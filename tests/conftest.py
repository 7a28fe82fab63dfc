"""
Pytest configuration and fixtures for vidshare tests.

Database-backed tests get a fresh SQLite file per test, created from the
ORM metadata. The API client talks to an application built by
``create_app`` around that database, so every procedure runs its real
transaction handling.
"""

from __future__ import annotations

import random
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.deps import get_rng
from vidshare.api.main import create_app
from vidshare.config.database import DatabaseManager
from vidshare.config.settings import Settings
from vidshare.container import container

from tests.factories import SessionFactory

RNG_SEED = 20240611

Seeder = Callable[..., Awaitable[None]]
Login = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'vidshare.db'}",
        development_mode=False,
        log_level="WARNING",
    )


@pytest.fixture
async def db_manager(test_settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """DatabaseManager with every table created."""
    manager = DatabaseManager(test_settings)
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding rows and for repository/service tests."""
    session_factory = db_manager.get_session_factory()
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed(db_session: AsyncSession) -> Seeder:
    """Persist ORM rows and commit, so API requests can see them."""

    async def _seed(*rows: Any) -> None:
        db_session.add_all(rows)
        await db_session.commit()

    return _seed


@pytest.fixture
def login(db_session: AsyncSession) -> Login:
    """Issue a session for a user and return Bearer auth headers."""

    async def _login(
        user_id: str, expires_in: timedelta = timedelta(days=1)
    ) -> dict[str, str]:
        row = SessionFactory.build(
            user_id=user_id, expires=datetime.now(timezone.utc) + expires_in
        )
        db_session.add(row)
        await db_session.commit()
        return {"Authorization": f"Bearer {row.session_token}"}

    return _login


@pytest.fixture
def app(
    test_settings: Settings, db_manager: DatabaseManager
) -> Generator[FastAPI, None, None]:
    """Application wired to the test database with a seeded random source."""
    application = create_app(settings=test_settings, db_manager=db_manager)
    application.dependency_overrides[get_rng] = lambda: random.Random(RNG_SEED)
    yield application
    application.dependency_overrides.clear()
    container.reset()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for the test application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
