"""
Tests for the health check.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from vidshare import __version__
from vidshare.api.deps import get_db_manager

pytestmark = pytest.mark.asyncio


async def test_healthy(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == __version__
    assert body["database"] == "connected"
    assert body["checks"]["database_latency_ms"] >= 0


async def test_unreachable_database(app: FastAPI, async_client: AsyncClient) -> None:
    session = MagicMock()
    session.execute = AsyncMock(
        side_effect=OperationalError("SELECT 1", {}, Exception("refused"))
    )

    async def _sessions():  # type: ignore[no-untyped-def]
        yield session

    broken = MagicMock()
    broken.get_session = _sessions
    app.dependency_overrides[get_db_manager] = lambda: broken

    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["database"] == "disconnected"
    assert body["checks"]["database_latency_ms"] is None
