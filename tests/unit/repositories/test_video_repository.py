"""Tests for VideoRepository listings and title search."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.repositories import VideoRepository
from vidshare.repositories.video_repository import SEARCH_RESULT_LIMIT

from tests.factories import UserFactory, VideoFactory

pytestmark = pytest.mark.asyncio


class TestVideoListings:
    """Published/draft filtering."""

    async def test_find_published_skips_drafts(self, db_session: AsyncSession) -> None:
        live = VideoFactory.build()
        draft = VideoFactory.build(publish=False)
        db_session.add_all([live, draft])
        await db_session.flush()

        videos = await VideoRepository().find_published(db_session)

        assert [v.id for v in videos] == [live.id]
        assert videos[0].user.id == live.user_id

    async def test_by_user_published_vs_all(self, db_session: AsyncSession) -> None:
        author = UserFactory.build()
        live = VideoFactory.build(user=author)
        draft = VideoFactory.build(user=author, publish=False)
        someone_else = VideoFactory.build()
        db_session.add_all([author, live, draft, someone_else])
        await db_session.flush()
        repo = VideoRepository()

        published = await repo.find_published_by_user(db_session, author.id)
        everything = await repo.find_by_user(db_session, author.id)

        assert [v.id for v in published] == [live.id]
        assert {v.id for v in everything} == {live.id, draft.id}

    async def test_get_with_user(self, db_session: AsyncSession) -> None:
        video = VideoFactory.build()
        db_session.add(video)
        await db_session.flush()
        db_session.expunge_all()

        loaded = await VideoRepository().get_with_user(db_session, video.id)

        assert loaded is not None
        assert loaded.user.name == video.user.name
        assert await VideoRepository().get_with_user(db_session, "missing") is None


class TestSearchPublished:
    """Substring search over titles."""

    async def test_matches_substring_of_published_titles(
        self, db_session: AsyncSession
    ) -> None:
        db_session.add_all(
            [
                VideoFactory.build(title="Knife sharpening at home"),
                VideoFactory.build(title="Sharpening chisels"),
                VideoFactory.build(title="Dovetail joints"),
                VideoFactory.build(title="Sharpening draft", publish=False),
            ]
        )
        await db_session.flush()

        videos = await VideoRepository().search_published(db_session, "harpening")

        assert sorted(v.title for v in videos) == [
            "Knife sharpening at home",
            "Sharpening chisels",
        ]

    async def test_wildcards_match_literally(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [
                VideoFactory.build(title="100% whole wheat"),
                VideoFactory.build(title="1000 loaves"),
                VideoFactory.build(title="snake_case tips"),
                VideoFactory.build(title="snakes in the garden"),
            ]
        )
        await db_session.flush()
        repo = VideoRepository()

        percent = await repo.search_published(db_session, "100%")
        underscore = await repo.search_published(db_session, "snake_")

        assert [v.title for v in percent] == ["100% whole wheat"]
        assert [v.title for v in underscore] == ["snake_case tips"]

    async def test_at_most_ten_results(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [VideoFactory.build(title=f"Bread episode {i}") for i in range(14)]
        )
        await db_session.flush()

        videos = await VideoRepository().search_published(db_session, "Bread")

        assert len(videos) == SEARCH_RESULT_LIMIT == 10
