"""
Tests for request id handling.
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from vidshare.api.middleware.request_id import (
    MAX_REQUEST_ID_LENGTH,
    _sanitize_request_id,
    get_request_id,
)


class TestSanitizeRequestId:
    """Client-supplied ids are kept, trimmed or replaced."""

    def test_valid_id_is_kept(self) -> None:
        assert _sanitize_request_id("abc-123_XYZ") == "abc-123_XYZ"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_id_generates_uuid(self, value: str | None) -> None:
        generated = _sanitize_request_id(value)

        assert len(generated) == 36
        assert generated.count("-") == 4

    @pytest.mark.parametrize("value", ["has space", "tab\tchar", "café"])
    def test_unprintable_id_is_replaced(self, value: str) -> None:
        assert _sanitize_request_id(value) != value

    def test_long_id_is_truncated(self) -> None:
        value = "a" * (MAX_REQUEST_ID_LENGTH + 20)

        assert _sanitize_request_id(value) == "a" * MAX_REQUEST_ID_LENGTH


def test_no_request_id_outside_request() -> None:
    assert get_request_id() == ""


@pytest.mark.asyncio
class TestRequestIdMiddleware:
    """The id is echoed on every response."""

    async def test_echoes_client_id(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/v1/health", headers={"X-Request-ID": "client-trace"}
        )

        assert response.headers["X-Request-ID"] == "client-trace"

    async def test_generates_id_when_absent(self, async_client: AsyncClient) -> None:
        first = await async_client.get("/api/v1/health")
        second = await async_client.get("/api/v1/health")

        assert first.headers["X-Request-ID"]
        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

    async def test_error_body_carries_id(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/v1/video/getVideoById",
            params={"id": "nope"},
            headers={"X-Request-ID": "lookup-7"},
        )

        assert response.status_code == 404
        assert response.json()["request_id"] == "lookup-7"
