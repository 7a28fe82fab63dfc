"""
Tests for the engagement, session, playlist and comment repositories.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.models.enums import EngagementType, RESERVED_PLAYLIST_TITLES
from vidshare.repositories import (
    AnnouncementEngagementRepository,
    AnnouncementRepository,
    CommentRepository,
    FollowEngagementRepository,
    PlaylistMembershipRepository,
    PlaylistRepository,
    SessionRepository,
    VideoEngagementRepository,
)

from tests.factories import (
    AnnouncementEngagementFactory,
    AnnouncementFactory,
    CommentFactory,
    FollowFactory,
    PlaylistFactory,
    PlaylistHasVideoFactory,
    SessionFactory,
    UserFactory,
    VideoEngagementFactory,
    VideoFactory,
)

pytestmark = pytest.mark.asyncio


class TestVideoEngagementRepository:
    """Reaction lookups and the partial unique index."""

    async def test_views_repeat_but_reactions_are_unique(
        self, db_session: AsyncSession
    ) -> None:
        viewer = UserFactory.build()
        video = VideoFactory.build()
        db_session.add_all(
            [
                viewer,
                video,
                VideoEngagementFactory.build(video_id=video.id, user_id=viewer.id),
                VideoEngagementFactory.build(video_id=video.id, user_id=viewer.id),
                VideoEngagementFactory.build(
                    video_id=video.id, user_id=viewer.id, engagement_type="LIKE"
                ),
            ]
        )
        await db_session.flush()

        db_session.add(
            VideoEngagementFactory.build(
                video_id=video.id, user_id=viewer.id, engagement_type="LIKE"
            )
        )
        with pytest.raises(IntegrityError):
            await db_session.flush()

    async def test_find_delete_and_kinds(self, db_session: AsyncSession) -> None:
        viewer = UserFactory.build()
        video = VideoFactory.build()
        db_session.add_all(
            [
                viewer,
                video,
                VideoEngagementFactory.build(video_id=video.id, user_id=viewer.id),
                VideoEngagementFactory.build(
                    video_id=video.id, user_id=viewer.id, engagement_type="DISLIKE"
                ),
            ]
        )
        await db_session.flush()
        repo = VideoEngagementRepository()

        assert await repo.kinds_for_user(db_session, video.id, viewer.id) == {
            "VIEW",
            "DISLIKE",
        }
        assert (
            await repo.find(db_session, video.id, viewer.id, EngagementType.LIKE)
            is None
        )
        assert (
            await repo.delete_matching(
                db_session, video.id, viewer.id, EngagementType.DISLIKE
            )
            == 1
        )
        assert await repo.kinds_for_user(db_session, video.id, viewer.id) == {"VIEW"}


class TestFollowEngagementRepository:
    """Pair lookups and follow listings."""

    async def test_pair_is_unique(self, db_session: AsyncSession) -> None:
        a, b = UserFactory.build(), UserFactory.build()
        db_session.add_all(
            [a, b, FollowFactory.build(follower_id=a.id, following_id=b.id)]
        )
        await db_session.flush()

        db_session.add(FollowFactory.build(follower_id=a.id, following_id=b.id))
        with pytest.raises(IntegrityError):
            await db_session.flush()

    async def test_get_followings_oldest_first(self, db_session: AsyncSession) -> None:
        fan, first, second = UserFactory.build(), UserFactory.build(), UserFactory.build()
        db_session.add_all([fan, first, second])
        db_session.add(FollowFactory.build(follower_id=fan.id, following_id=first.id))
        await db_session.flush()
        db_session.add(FollowFactory.build(follower_id=fan.id, following_id=second.id))
        await db_session.flush()
        repo = FollowEngagementRepository()

        follows = await repo.get_followings(db_session, fan.id)

        assert [f.following.id for f in follows] == [first.id, second.id]
        assert await repo.find_pair(db_session, fan.id, first.id) is not None
        assert await repo.delete_pair(db_session, fan.id, first.id) == 1
        assert await repo.find_pair(db_session, fan.id, first.id) is None


class TestAnnouncementRepositories:
    """Announcements and their reactions."""

    async def test_find_by_user_and_reaction_kinds(
        self, db_session: AsyncSession
    ) -> None:
        author, viewer = UserFactory.build(), UserFactory.build()
        older = AnnouncementFactory.build(user=author)
        db_session.add_all([author, viewer, older])
        await db_session.flush()
        newer = AnnouncementFactory.build(user=author)
        db_session.add_all(
            [
                newer,
                AnnouncementEngagementFactory.build(
                    announcement_id=older.id, user_id=viewer.id
                ),
            ]
        )
        await db_session.flush()

        announcements = await AnnouncementRepository().find_by_user(
            db_session, author.id
        )
        held = await AnnouncementEngagementRepository().kinds_for_user(
            db_session, [older.id, newer.id], viewer.id
        )

        assert [a.id for a in announcements] == [older.id, newer.id]
        assert held == {(older.id, "LIKE")}


class TestSessionRepository:
    """Token lookup and expiry."""

    async def test_get_by_token_and_expiry(self, db_session: AsyncSession) -> None:
        user = UserFactory.build()
        live = SessionFactory.build(user_id=user.id)
        stale = SessionFactory.build(
            user_id=user.id, expires=datetime.now(timezone.utc) - timedelta(minutes=1)
        )
        db_session.add_all([user, live, stale])
        await db_session.commit()
        db_session.expunge_all()
        repo = SessionRepository()

        live_row = await repo.get_by_token(db_session, live.session_token)
        stale_row = await repo.get_by_token(db_session, stale.session_token)

        assert live_row is not None and live_row.user_id == user.id
        assert stale_row is not None
        assert repo.is_expired(live_row) is False
        assert repo.is_expired(stale_row) is True
        assert await repo.get_by_token(db_session, "unknown-token") is None

    def test_is_expired_treats_naive_as_utc(self) -> None:
        row = SessionFactory.build(expires=datetime(2030, 1, 1, 12, 0))
        repo = SessionRepository()

        assert repo.is_expired(row, now=datetime(2030, 1, 1, 11, 59, tzinfo=timezone.utc)) is False
        assert repo.is_expired(row, now=datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)) is True


class TestPlaylistRepositories:
    """Playlist listings and membership aggregates."""

    async def test_find_by_user_excluding_reserved_titles(
        self, db_session: AsyncSession
    ) -> None:
        owner = UserFactory.build()
        db_session.add_all(
            [
                owner,
                PlaylistFactory.build(user=owner, title="Liked Videos"),
                PlaylistFactory.build(user=owner, title="History"),
                PlaylistFactory.build(user=owner, title="Road trip"),
            ]
        )
        await db_session.flush()
        repo = PlaylistRepository()

        everything = await repo.find_by_user(db_session, owner.id)
        saveable = await repo.find_by_user(
            db_session, owner.id, exclude_titles=RESERVED_PLAYLIST_TITLES
        )

        assert len(everything) == 3
        assert [p.title for p in saveable] == ["Road trip"]
        assert (await repo.get_by_title(db_session, owner.id, "History")) is not None

    async def test_membership_aggregates(self, db_session: AsyncSession) -> None:
        playlist, empty = PlaylistFactory.build(), PlaylistFactory.build()
        first = VideoFactory.build(thumbnail_url="https://cdn.example.com/first.jpg")
        second = VideoFactory.build(thumbnail_url="https://cdn.example.com/second.jpg")
        db_session.add_all([playlist, empty, first, second])
        db_session.add(PlaylistHasVideoFactory.build(playlist_id=playlist.id, video_id=first.id))
        await db_session.flush()
        db_session.add(
            PlaylistHasVideoFactory.build(playlist_id=playlist.id, video_id=second.id)
        )
        await db_session.flush()
        repo = PlaylistMembershipRepository()
        ids = [playlist.id, empty.id]

        assert await repo.video_ids_by_playlist(db_session, ids) == {
            playlist.id: [first.id, second.id],
            empty.id: [],
        }
        assert await repo.count_by_playlist(db_session, ids) == {playlist.id: 2}
        assert await repo.first_thumbnails(db_session, ids) == {
            playlist.id: "https://cdn.example.com/first.jpg"
        }
        members = await repo.get_playlist_videos(db_session, playlist.id)
        assert [m.video.id for m in members] == [first.id, second.id]
        assert members[0].video.user is not None


class TestCommentRepository:
    """Comments are listed oldest first with their authors."""

    async def test_find_by_video(self, db_session: AsyncSession) -> None:
        video = VideoFactory.build()
        older = CommentFactory.build(video_id=video.id, message="First!")
        db_session.add_all([video, older])
        await db_session.flush()
        newer = CommentFactory.build(video_id=video.id, message="Great pacing")
        db_session.add(newer)
        await db_session.flush()

        comments = await CommentRepository().find_by_video(db_session, video.id)

        assert [c.message for c in comments] == ["First!", "Great pacing"]
        assert comments[0].user.id == older.user_id
