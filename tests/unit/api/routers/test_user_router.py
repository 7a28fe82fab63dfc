"""
Tests for channel, follow, dashboard and profile procedures.
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.conftest import Login, Seeder
from tests.factories import (
    FollowFactory,
    UserFactory,
    VideoEngagementFactory,
    VideoFactory,
)

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/user"


class TestChannelAndFollows:
    """Follow toggles seen through the channel page."""

    async def test_follow_shows_on_channel(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        fan, creator = UserFactory.build(), UserFactory.build()
        await seed(fan, creator)

        response = await async_client.post(
            f"{BASE}/addFollow",
            json={"followerId": fan.id, "followingId": creator.id},
            headers=await login(fan.id),
        )
        channel = await async_client.get(
            f"{BASE}/getChannelById", params={"id": creator.id, "viewerId": fan.id}
        )

        assert response.json()["active"] is True
        assert response.json()["engagement"]["engagementType"] == "FOLLOW"
        body = channel.json()
        assert body["viewer"] == {"hasFollowed": True}
        assert body["user"]["followers"] == 1
        assert body["user"]["following"] == 0

    async def test_follow_twice_unfollows(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        fan, creator = UserFactory.build(), UserFactory.build()
        await seed(fan, creator)
        headers = await login(fan.id)
        body = {"followerId": fan.id, "followingId": creator.id}

        await async_client.post(f"{BASE}/addFollow", json=body, headers=headers)
        second = await async_client.post(f"{BASE}/addFollow", json=body, headers=headers)
        channel = await async_client.get(
            f"{BASE}/getChannelById", params={"id": creator.id, "viewerId": fan.id}
        )

        assert second.json()["active"] is False
        assert channel.json()["viewer"]["hasFollowed"] is False
        assert channel.json()["user"]["followers"] == 0

    async def test_self_follow_is_rejected(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        me = UserFactory.build()
        await seed(me)

        response = await async_client.post(
            f"{BASE}/addFollow",
            json={"followerId": me.id, "followingId": me.id},
            headers=await login(me.id),
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["loc"] == ["body", "followingId"]

    async def test_follow_unknown_user(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        me = UserFactory.build()
        await seed(me)

        response = await async_client.post(
            f"{BASE}/addFollow",
            json={"followerId": me.id, "followingId": "ghost"},
            headers=await login(me.id),
        )

        assert response.status_code == 404

    async def test_unknown_channel(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            f"{BASE}/getChannelById", params={"id": "ghost"}
        )

        assert response.status_code == 404

    async def test_user_followings(
        self, async_client: AsyncClient, seed: Seeder
    ) -> None:
        fan, first, second, viewer = (UserFactory.build() for _ in range(4))
        await seed(fan, first, second, viewer)
        await seed(FollowFactory.build(follower_id=fan.id, following_id=first.id))
        await seed(
            FollowFactory.build(follower_id=fan.id, following_id=second.id),
            FollowFactory.build(follower_id=viewer.id, following_id=second.id),
        )

        response = await async_client.get(
            f"{BASE}/getUserFollowings", params={"id": fan.id, "viewerId": viewer.id}
        )

        body = response.json()
        assert body["user"]["id"] == fan.id
        assert [
            (entry["following"]["id"], entry["following"]["followers"], entry["viewerHasFollowed"])
            for entry in body["followings"]
        ] == [(first.id, 1, False), (second.id, 2, True)]


class TestDashboard:
    """Creator dashboard totals."""

    async def test_totals_include_drafts(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        owner, fan = UserFactory.build(), UserFactory.build()
        live = VideoFactory.build(user=owner)
        draft = VideoFactory.build(user=owner, publish=False)
        await seed(
            owner,
            fan,
            live,
            draft,
            VideoEngagementFactory.build(video_id=live.id),
            VideoEngagementFactory.build(video_id=draft.id),
            VideoEngagementFactory.build(
                video_id=live.id, user_id=fan.id, engagement_type="LIKE"
            ),
            FollowFactory.build(follower_id=fan.id, following_id=owner.id),
        )

        response = await async_client.get(
            f"{BASE}/getDashboardData",
            params={"ownerId": owner.id},
            headers=await login(owner.id),
        )

        body = response.json()
        assert {video["id"] for video in body["videos"]} == {live.id, draft.id}
        assert body["totalLikes"] == 1
        assert body["totalViews"] == 2
        assert body["totalFollowers"] == 1


class TestUpdateUser:
    """Profile edits by the session user."""

    async def test_partial_update(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        me = UserFactory.build(name="Old Name", handle="@keepme")
        await seed(me)

        response = await async_client.post(
            f"{BASE}/updateUser",
            json={"id": me.id, "name": "New Name", "backgroundImage": "https://cdn.example.com/b.jpg"},
            headers=await login(me.id),
        )

        body = response.json()
        assert body["name"] == "New Name"
        assert body["backgroundImage"] == "https://cdn.example.com/b.jpg"
        assert body["handle"] == "@keepme"

    async def test_other_profile_is_not_found(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        me, other = UserFactory.build(), UserFactory.build()
        await seed(me, other)

        response = await async_client.post(
            f"{BASE}/updateUser",
            json={"id": other.id, "name": "Hijacked"},
            headers=await login(me.id),
        )

        assert response.status_code == 404

    async def test_taken_email_is_conflict(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        owner = UserFactory.build(email="taken@example.com")
        me = UserFactory.build(email="mine@example.com")
        await seed(owner, me)

        response = await async_client.post(
            f"{BASE}/updateUser",
            json={"id": me.id, "email": "taken@example.com"},
            headers=await login(me.id),
        )

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"
