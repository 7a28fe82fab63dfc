"""
Tests for request dependencies: session resolution and actor checks.
"""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.deps import ensure_actor
from vidshare.container import RequestContext
from vidshare.exceptions import AuthorizationError

from tests.conftest import Login, Seeder
from tests.factories import UserFactory

DASHBOARD = "/api/v1/user/getDashboardData"


class TestEnsureActor:
    """The acting user in a body must be the session user."""

    def test_matching_actor_passes(self) -> None:
        ctx = RequestContext(session=MagicMock(spec=AsyncSession), user_id="u1")

        ensure_actor(ctx, "u1", "userId")

    def test_mismatch_is_forbidden(self) -> None:
        ctx = RequestContext(session=MagicMock(spec=AsyncSession), user_id="u1")

        with pytest.raises(AuthorizationError) as exc_info:
            ensure_actor(ctx, "u2", "ownerId")

        assert exc_info.value.status_code == 403
        assert exc_info.value.details == {"field": "ownerId"}
        assert exc_info.value.message == "ownerId does not match the session user"


@pytest.mark.asyncio
class TestProtectedContext:
    """Bearer and cookie tokens resolve to the session user."""

    async def test_missing_token(self, async_client: AsyncClient) -> None:
        response = await async_client.get(DASHBOARD, params={"ownerId": "anyone"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["code"] == "NOT_AUTHENTICATED"

    async def test_unknown_token(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            DASHBOARD,
            params={"ownerId": "anyone"},
            headers={"Authorization": "Bearer not-a-real-token"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid session token"

    async def test_expired_token(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        user = UserFactory.build()
        await seed(user)
        headers = await login(user.id, expires_in=timedelta(seconds=-5))

        response = await async_client.get(
            DASHBOARD, params={"ownerId": user.id}, headers=headers
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Session expired"

    async def test_bearer_token(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        user = UserFactory.build()
        await seed(user)
        headers = await login(user.id)

        response = await async_client.get(
            DASHBOARD, params={"ownerId": user.id}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.id

    async def test_cookie_token(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        user = UserFactory.build()
        await seed(user)
        token = (await login(user.id))["Authorization"].removeprefix("Bearer ")

        response = await async_client.get(
            DASHBOARD,
            params={"ownerId": user.id},
            headers={"Cookie": f"session_token={token}"},
        )

        assert response.status_code == 200

    async def test_other_users_dashboard_is_forbidden(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        me, someone = UserFactory.build(), UserFactory.build()
        await seed(me, someone)
        headers = await login(me.id)

        response = await async_client.get(
            DASHBOARD, params={"ownerId": someone.id}, headers=headers
        )

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_AUTHORIZED"
