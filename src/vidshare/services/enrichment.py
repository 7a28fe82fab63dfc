"""
Aggregate enrichment service.

Attaches derived, read-only fields (engagement counts and viewer flags) to
videos, users and announcements. Counts for a batch of entities are fetched
with one grouped query per metric; ids without facts count as zero.

Viewer flags are personal: when no viewer id is supplied every flag is
False.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Set

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.models.enums import EngagementType
from vidshare.repositories.announcement_engagement_repository import (
    AnnouncementEngagementRepository,
)
from vidshare.repositories.follow_engagement_repository import (
    FollowEngagementRepository,
)
from vidshare.repositories.video_engagement_repository import (
    VideoEngagementRepository,
)

logger = logging.getLogger(__name__)

VIDEO_COUNT_KINDS: tuple[EngagementType, ...] = (
    EngagementType.VIEW,
    EngagementType.LIKE,
    EngagementType.DISLIKE,
)


@dataclass
class VideoCounts:
    """Engagement totals for one video."""

    views: int = 0
    likes: int = 0
    dislikes: int = 0


@dataclass
class VideoViewerFlags:
    """What the viewer has done to a video and its owner."""

    has_liked: bool = False
    has_disliked: bool = False
    has_followed: bool = False


@dataclass
class ReactionCounts:
    """Like/dislike totals for one announcement."""

    likes: int = 0
    dislikes: int = 0


@dataclass
class ReactionFlags:
    """The viewer's reactions to one announcement."""

    has_liked: bool = False
    has_disliked: bool = False


def _is_viewer(viewer_id: Optional[str]) -> bool:
    return bool(viewer_id)


class AggregateEnricher:
    """Computes engagement aggregates and viewer flags."""

    def __init__(
        self,
        video_engagement_repo: VideoEngagementRepository,
        follow_engagement_repo: FollowEngagementRepository,
        announcement_engagement_repo: AnnouncementEngagementRepository,
    ) -> None:
        self._video_engagement_repo = video_engagement_repo
        self._follow_engagement_repo = follow_engagement_repo
        self._announcement_engagement_repo = announcement_engagement_repo

    async def video_counts(
        self,
        session: AsyncSession,
        video_ids: Sequence[str],
        kinds: Iterable[EngagementType] = VIDEO_COUNT_KINDS,
    ) -> Dict[str, VideoCounts]:
        """
        Count engagement facts for a batch of videos.

        Parameters
        ----------
        session : AsyncSession
            Database session.
        video_ids : Sequence[str]
            Videos to count for.
        kinds : Iterable[EngagementType]
            Which metrics to query; the rest stay at zero.

        Returns
        -------
        Dict[str, VideoCounts]
            One entry per requested video id.
        """
        counts = {video_id: VideoCounts() for video_id in video_ids}
        kinds = tuple(kinds)
        if not counts:
            return counts

        field_by_kind = {
            EngagementType.VIEW: "views",
            EngagementType.LIKE: "likes",
            EngagementType.DISLIKE: "dislikes",
        }
        for kind in kinds:
            per_video = await self._video_engagement_repo.count_by_video(
                session, list(counts), kind
            )
            for video_id, value in per_video.items():
                setattr(counts[video_id], field_by_kind[kind], value)

        logger.debug(
            "Counted %s for %d videos", [k.value for k in kinds], len(counts)
        )
        return counts

    async def video_viewer_flags(
        self,
        session: AsyncSession,
        video_id: str,
        viewer_id: Optional[str],
        owner_id: Optional[str] = None,
    ) -> VideoViewerFlags:
        """
        Viewer flags for a single video.

        ``has_followed`` reports whether the viewer follows ``owner_id``
        and stays False when no owner is given.
        """
        if not _is_viewer(viewer_id):
            return VideoViewerFlags()
        assert viewer_id is not None

        kinds = await self._video_engagement_repo.kinds_for_user(
            session, video_id, viewer_id
        )
        has_followed = False
        if owner_id:
            has_followed = owner_id in await self.viewer_follows(
                session, viewer_id, [owner_id]
            )
        return VideoViewerFlags(
            has_liked=EngagementType.LIKE.value in kinds,
            has_disliked=EngagementType.DISLIKE.value in kinds,
            has_followed=has_followed,
        )

    async def follower_counts(
        self, session: AsyncSession, user_ids: Sequence[str]
    ) -> Dict[str, int]:
        """Followers per user (rows where the user is the followed side)."""
        found = await self._follow_engagement_repo.count_followers(session, user_ids)
        return {user_id: found.get(user_id, 0) for user_id in user_ids}

    async def following_counts(
        self, session: AsyncSession, user_ids: Sequence[str]
    ) -> Dict[str, int]:
        """Number of users each user follows."""
        found = await self._follow_engagement_repo.count_following(session, user_ids)
        return {user_id: found.get(user_id, 0) for user_id in user_ids}

    async def viewer_follows(
        self,
        session: AsyncSession,
        viewer_id: Optional[str],
        user_ids: Sequence[str],
    ) -> Set[str]:
        """Subset of ``user_ids`` followed by the viewer."""
        if not _is_viewer(viewer_id):
            return set()
        assert viewer_id is not None
        return await self._follow_engagement_repo.followed_among(
            session, viewer_id, user_ids
        )

    async def announcement_counts(
        self, session: AsyncSession, announcement_ids: Sequence[str]
    ) -> Dict[str, ReactionCounts]:
        """Like/dislike totals for a batch of announcements."""
        repo = self._announcement_engagement_repo
        likes = await repo.count_by_announcement(
            session, announcement_ids, EngagementType.LIKE
        )
        dislikes = await repo.count_by_announcement(
            session, announcement_ids, EngagementType.DISLIKE
        )
        return {
            announcement_id: ReactionCounts(
                likes=likes.get(announcement_id, 0),
                dislikes=dislikes.get(announcement_id, 0),
            )
            for announcement_id in announcement_ids
        }

    async def announcement_viewer_flags(
        self,
        session: AsyncSession,
        announcement_ids: Sequence[str],
        viewer_id: Optional[str],
    ) -> Dict[str, ReactionFlags]:
        """The viewer's reactions to each announcement."""
        if not _is_viewer(viewer_id):
            return {
                announcement_id: ReactionFlags() for announcement_id in announcement_ids
            }
        assert viewer_id is not None

        held = await self._announcement_engagement_repo.kinds_for_user(
            session, announcement_ids, viewer_id
        )
        return {
            announcement_id: ReactionFlags(
                has_liked=(announcement_id, EngagementType.LIKE.value) in held,
                has_disliked=(announcement_id, EngagementType.DISLIKE.value) in held,
            )
            for announcement_id in announcement_ids
        }
