"""
Tests for the video procedures.
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.conftest import Login, Seeder
from tests.factories import (
    CommentFactory,
    FollowFactory,
    PlaylistFactory,
    UserFactory,
    VideoEngagementFactory,
    VideoFactory,
)

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/video"


class TestGetVideoById:
    """Video detail with counts, comments and viewer flags."""

    async def test_detail_with_viewer(
        self, async_client: AsyncClient, seed: Seeder
    ) -> None:
        author, viewer = UserFactory.build(), UserFactory.build()
        video = VideoFactory.build(user=author)
        await seed(
            author,
            viewer,
            video,
            VideoEngagementFactory.build(video_id=video.id),
            VideoEngagementFactory.build(video_id=video.id, user_id=viewer.id),
            VideoEngagementFactory.build(
                video_id=video.id, user_id=viewer.id, engagement_type="LIKE"
            ),
            FollowFactory.build(follower_id=viewer.id, following_id=author.id),
            CommentFactory.build(video_id=video.id, user=viewer, message="Loved it"),
        )

        response = await async_client.get(
            f"{BASE}/getVideoById", params={"id": video.id, "viewerId": viewer.id}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["video"]["id"] == video.id
        assert (
            body["video"]["views"],
            body["video"]["likes"],
            body["video"]["dislikes"],
        ) == (2, 1, 0)
        assert body["user"]["id"] == author.id
        assert body["user"]["followers"] == 1
        assert body["comments"][0]["comment"]["message"] == "Loved it"
        assert body["comments"][0]["user"]["id"] == viewer.id
        assert body["viewer"] == {
            "hasFollowed": True,
            "hasLiked": True,
            "hasDisliked": False,
        }

    @pytest.mark.parametrize("params", [{}, {"viewerId": ""}])
    async def test_without_viewer_flags_are_false(
        self, async_client: AsyncClient, seed: Seeder, params: dict[str, str]
    ) -> None:
        video = VideoFactory.build()
        await seed(video)

        response = await async_client.get(
            f"{BASE}/getVideoById", params={"id": video.id, **params}
        )

        assert response.json()["viewer"] == {
            "hasFollowed": False,
            "hasLiked": False,
            "hasDisliked": False,
        }

    async def test_unknown_video(self, async_client: AsyncClient) -> None:
        response = await async_client.get(f"{BASE}/getVideoById", params={"id": "nope"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Video 'nope' not found"


class TestDiscoveryLists:
    """Random, search and per-user listings of published videos."""

    async def test_random_returns_distinct_published_videos(
        self, async_client: AsyncClient, seed: Seeder
    ) -> None:
        published = [VideoFactory.build() for _ in range(5)]
        await seed(*published, VideoFactory.build(publish=False))
        published_ids = {video.id for video in published}

        response = await async_client.get(f"{BASE}/getRandomVideos", params={"count": 3})

        body = response.json()
        ids = [video["id"] for video in body["videos"]]
        assert len(ids) == len(set(ids)) == 3
        assert set(ids) <= published_ids
        assert [user["id"] for user in body["users"]] == [
            video["userId"] for video in body["videos"]
        ]

    async def test_random_count_above_published(
        self, async_client: AsyncClient, seed: Seeder
    ) -> None:
        await seed(VideoFactory.build(), VideoFactory.build())

        response = await async_client.get(
            f"{BASE}/getRandomVideos", params={"count": 10}
        )

        assert len(response.json()["videos"]) == 2

    async def test_random_negative_count_rejected(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.get(
            f"{BASE}/getRandomVideos", params={"count": -1}
        )

        assert response.status_code == 422

    async def test_random_large_count_returns_every_published(
        self, async_client: AsyncClient, seed: Seeder
    ) -> None:
        first, second = VideoFactory.build(), VideoFactory.build()
        await seed(first, second, VideoFactory.build(publish=False))

        response = await async_client.get(
            f"{BASE}/getRandomVideos", params={"count": 500}
        )

        assert response.status_code == 200
        assert {v["id"] for v in response.json()["videos"]} == {first.id, second.id}

    async def test_search(self, async_client: AsyncClient, seed: Seeder) -> None:
        hit = VideoFactory.build(title="Pasta from scratch")
        await seed(
            hit,
            VideoFactory.build(title="Pasta sauce draft", publish=False),
            VideoFactory.build(title="Bread"),
            VideoEngagementFactory.build(video_id=hit.id),
        )

        response = await async_client.get(
            f"{BASE}/getVideoBySearch", params={"query": "Pasta"}
        )

        videos = response.json()["videos"]
        assert [video["id"] for video in videos] == [hit.id]
        assert videos[0]["views"] == 1

    async def test_videos_by_user(self, async_client: AsyncClient, seed: Seeder) -> None:
        author = UserFactory.build()
        live = VideoFactory.build(user=author)
        await seed(author, live, VideoFactory.build(user=author, publish=False))

        response = await async_client.get(
            f"{BASE}/getVideosByUserId", params={"userId": author.id}
        )

        body = response.json()
        assert [video["id"] for video in body["videos"]] == [live.id]
        assert body["users"][0]["id"] == author.id


class TestOwnerMutations:
    """Create, update, publish and delete."""

    async def test_create_then_publish_twice(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        owner = UserFactory.build()
        await seed(owner)
        headers = await login(owner.id)

        created = await async_client.post(
            f"{BASE}/createVideo",
            json={"userId": owner.id, "videoUrl": "https://cdn.example.com/new.mp4"},
            headers=headers,
        )
        video = created.json()
        assert created.status_code == 200
        assert video["publish"] is False
        assert video["userId"] == owner.id

        owner_body = {"id": video["id"], "ownerId": owner.id}
        first = await async_client.post(
            f"{BASE}/publishVideo", json=owner_body, headers=headers
        )
        second = await async_client.post(
            f"{BASE}/publishVideo", json=owner_body, headers=headers
        )

        assert first.json()["publish"] is True
        assert second.json()["publish"] is False

    async def test_create_requires_session(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            f"{BASE}/createVideo",
            json={"userId": "u1", "videoUrl": "https://cdn.example.com/x.mp4"},
        )

        assert response.status_code == 401

    async def test_create_for_someone_else_is_forbidden(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        me, other = UserFactory.build(), UserFactory.build()
        await seed(me, other)

        response = await async_client.post(
            f"{BASE}/createVideo",
            json={"userId": other.id, "videoUrl": "https://cdn.example.com/x.mp4"},
            headers=await login(me.id),
        )

        assert response.status_code == 403

    async def test_update_keeps_omitted_fields(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        video = VideoFactory.build(title="Old title", description="Keep me")
        await seed(video)

        response = await async_client.post(
            f"{BASE}/updateVideo",
            json={"id": video.id, "ownerId": video.user_id, "title": "New title"},
            headers=await login(video.user_id),
        )

        body = response.json()
        assert body["title"] == "New title"
        assert body["description"] == "Keep me"

    async def test_wrong_owner_is_not_found(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        video = VideoFactory.build()
        intruder = UserFactory.build()
        await seed(video, intruder)
        headers = await login(intruder.id)

        for procedure in ("updateVideo", "publishVideo", "deleteVideo"):
            response = await async_client.post(
                f"{BASE}/{procedure}",
                json={"id": video.id, "ownerId": intruder.id, "title": "Mine now"},
                headers=headers,
            )
            assert response.status_code == 404

    async def test_delete_removes_video(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        video = VideoFactory.build()
        await seed(
            video,
            CommentFactory.build(video_id=video.id),
            VideoEngagementFactory.build(video_id=video.id),
        )

        response = await async_client.post(
            f"{BASE}/deleteVideo",
            json={"id": video.id, "ownerId": video.user_id},
            headers=await login(video.user_id),
        )
        lookup = await async_client.get(
            f"{BASE}/getVideoById", params={"id": video.id}
        )

        assert response.status_code == 200
        assert response.json()["id"] == video.id
        assert lookup.status_code == 404


class TestAddVideoToPlaylist:
    """Membership toggle on the caller's playlists."""

    async def test_toggle_membership(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        playlist = PlaylistFactory.build()
        video = VideoFactory.build()
        await seed(playlist, video)
        headers = await login(playlist.user_id)
        body = {"playlistId": playlist.id, "videoId": video.id}

        added = await async_client.post(
            f"{BASE}/addVideoToPlaylist", json=body, headers=headers
        )
        removed = await async_client.post(
            f"{BASE}/addVideoToPlaylist", json=body, headers=headers
        )

        assert added.json()["active"] is True
        assert added.json()["engagement"]["videoId"] == video.id
        assert removed.json() == {
            "active": False,
            "deletedCount": 1,
            "opposingRemoved": 0,
            "engagement": None,
        }

    async def test_someone_elses_playlist_is_not_found(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        playlist = PlaylistFactory.build()
        video = VideoFactory.build()
        await seed(playlist, video)

        response = await async_client.post(
            f"{BASE}/addVideoToPlaylist",
            json={"playlistId": playlist.id, "videoId": video.id},
            headers=await login(video.user_id),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == f"Playlist '{playlist.id}' not found"

    async def test_unknown_video_is_not_found(
        self, async_client: AsyncClient, seed: Seeder, login: Login
    ) -> None:
        playlist = PlaylistFactory.build()
        await seed(playlist)

        response = await async_client.post(
            f"{BASE}/addVideoToPlaylist",
            json={"playlistId": playlist.id, "videoId": "ghost"},
            headers=await login(playlist.user_id),
        )

        assert response.status_code == 404
