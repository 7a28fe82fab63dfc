"""
Engagement toggle service.

Flips engagement facts between present and absent. LIKE and DISLIKE are
mutually exclusive: toggling one first clears every fact of the other for
the same (subject, user). Follows and playlist memberships have no opposing
kind.

Every call runs inside the caller's transaction. Concurrent duplicate
inserts trip the storage uniqueness constraints and surface as
``ConflictError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.db.models import AnnouncementEngagement as AnnouncementEngagementDB
from vidshare.db.models import FollowEngagement as FollowEngagementDB
from vidshare.db.models import PlaylistHasVideo as PlaylistHasVideoDB
from vidshare.db.models import VideoEngagement as VideoEngagementDB
from vidshare.exceptions import ConflictError
from vidshare.models.engagement import (
    AnnouncementEngagementCreate,
    FollowEngagementCreate,
    PlaylistHasVideoCreate,
    VideoEngagementCreate,
)
from vidshare.models.enums import EngagementType
from vidshare.repositories.announcement_engagement_repository import (
    AnnouncementEngagementRepository,
)
from vidshare.repositories.follow_engagement_repository import (
    FollowEngagementRepository,
)
from vidshare.repositories.playlist_membership_repository import (
    PlaylistMembershipRepository,
)
from vidshare.repositories.video_engagement_repository import (
    VideoEngagementRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

REACTION_TYPES = (EngagementType.LIKE, EngagementType.DISLIKE)


@dataclass
class ToggleResult(Generic[T]):
    """Outcome of a single toggle.

    Attributes
    ----------
    active : bool
        Whether the requested fact exists after the toggle.
    created : Optional[T]
        The row created when the toggle switched on, else None.
    deleted_count : int
        Rows of the requested kind removed when the toggle switched off.
    opposing_removed : int
        Rows of the opposing kind removed before toggling.
    """

    active: bool
    created: Optional[T] = None
    deleted_count: int = 0
    opposing_removed: int = 0


class EngagementToggler:
    """Service applying the toggle idiom to every engagement kind."""

    def __init__(
        self,
        video_engagement_repo: VideoEngagementRepository,
        announcement_engagement_repo: AnnouncementEngagementRepository,
        follow_engagement_repo: FollowEngagementRepository,
        playlist_membership_repo: PlaylistMembershipRepository,
    ) -> None:
        self._video_engagement_repo = video_engagement_repo
        self._announcement_engagement_repo = announcement_engagement_repo
        self._follow_engagement_repo = follow_engagement_repo
        self._playlist_membership_repo = playlist_membership_repo

    @staticmethod
    def _require_reaction(kind: EngagementType) -> None:
        if kind not in REACTION_TYPES:
            raise ValueError(
                f"{kind.value} cannot be toggled; expected LIKE or DISLIKE"
            )

    @staticmethod
    async def _create(
        create: Callable[[], Awaitable[T]], entity_type: str, identifier: str
    ) -> T:
        """Run an insert, mapping a uniqueness violation to a conflict."""
        try:
            return await create()
        except IntegrityError as e:
            logger.warning(
                "Concurrent toggle lost uniqueness race for %s %s: %s",
                entity_type,
                identifier,
                e.orig,
            )
            raise ConflictError(
                message=f"{entity_type} was modified concurrently; retry the request",
                details={"resource_type": entity_type, "identifier": identifier},
            ) from e

    async def toggle_video_engagement(
        self,
        session: AsyncSession,
        video_id: str,
        user_id: str,
        kind: EngagementType,
    ) -> ToggleResult[VideoEngagementDB]:
        """
        Toggle a LIKE or DISLIKE on a video.

        Parameters
        ----------
        session : AsyncSession
            Request-scoped database session.
        video_id : str
            Video being reacted to.
        user_id : str
            Acting user.
        kind : EngagementType
            LIKE or DISLIKE.

        Returns
        -------
        ToggleResult[VideoEngagementDB]
            State after the toggle.

        Raises
        ------
        ValueError
            If ``kind`` is not LIKE or DISLIKE.
        ConflictError
            If a concurrent request inserted the same fact first.
        """
        self._require_reaction(kind)
        repo = self._video_engagement_repo

        opposing_removed = 0
        if kind.opposing is not None:
            opposing_removed = await repo.delete_matching(
                session, video_id, user_id, kind.opposing
            )

        existing = await repo.find(session, video_id, user_id, kind)
        if existing is not None:
            deleted = await repo.delete_matching(session, video_id, user_id, kind)
            logger.info(
                "Video %s: %s cleared by user %s", video_id, kind.value, user_id
            )
            return ToggleResult(
                active=False,
                deleted_count=deleted,
                opposing_removed=opposing_removed,
            )

        created = await self._create(
            lambda: repo.create(
                session,
                obj_in=VideoEngagementCreate(
                    video_id=video_id, user_id=user_id, engagement_type=kind
                ),
            ),
            "VideoEngagement",
            video_id,
        )
        logger.info("Video %s: %s set by user %s", video_id, kind.value, user_id)
        return ToggleResult(
            active=True, created=created, opposing_removed=opposing_removed
        )

    async def toggle_announcement_engagement(
        self,
        session: AsyncSession,
        announcement_id: str,
        user_id: str,
        kind: EngagementType,
    ) -> ToggleResult[AnnouncementEngagementDB]:
        """Toggle a LIKE or DISLIKE on an announcement."""
        self._require_reaction(kind)
        repo = self._announcement_engagement_repo

        opposing_removed = 0
        if kind.opposing is not None:
            opposing_removed = await repo.delete_matching(
                session, announcement_id, user_id, kind.opposing
            )

        existing = await repo.find(session, announcement_id, user_id, kind)
        if existing is not None:
            deleted = await repo.delete_matching(
                session, announcement_id, user_id, kind
            )
            logger.info(
                "Announcement %s: %s cleared by user %s",
                announcement_id,
                kind.value,
                user_id,
            )
            return ToggleResult(
                active=False,
                deleted_count=deleted,
                opposing_removed=opposing_removed,
            )

        created = await self._create(
            lambda: repo.create(
                session,
                obj_in=AnnouncementEngagementCreate(
                    announcement_id=announcement_id,
                    user_id=user_id,
                    engagement_type=kind,
                ),
            ),
            "AnnouncementEngagement",
            announcement_id,
        )
        logger.info(
            "Announcement %s: %s set by user %s", announcement_id, kind.value, user_id
        )
        return ToggleResult(
            active=True, created=created, opposing_removed=opposing_removed
        )

    async def toggle_follow(
        self, session: AsyncSession, follower_id: str, following_id: str
    ) -> ToggleResult[FollowEngagementDB]:
        """
        Follow or unfollow a user.

        Raises
        ------
        pydantic.ValidationError
            If ``follower_id`` equals ``following_id``.
        """
        obj_in = FollowEngagementCreate(
            follower_id=follower_id, following_id=following_id
        )
        repo = self._follow_engagement_repo

        existing = await repo.find_pair(session, follower_id, following_id)
        if existing is not None:
            deleted = await repo.delete_pair(session, follower_id, following_id)
            logger.info("User %s unfollowed %s", follower_id, following_id)
            return ToggleResult(active=False, deleted_count=deleted)

        created = await self._create(
            lambda: repo.create(session, obj_in=obj_in),
            "FollowEngagement",
            following_id,
        )
        logger.info("User %s followed %s", follower_id, following_id)
        return ToggleResult(active=True, created=created)

    async def toggle_playlist_video(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> ToggleResult[PlaylistHasVideoDB]:
        """Add a video to a playlist, or remove it if already a member."""
        repo = self._playlist_membership_repo

        if await repo.membership_exists(session, playlist_id, video_id):
            deleted = await repo.delete_membership(session, playlist_id, video_id)
            logger.info("Playlist %s: removed video %s", playlist_id, video_id)
            return ToggleResult(active=False, deleted_count=deleted)

        created = await self._create(
            lambda: repo.create(
                session,
                obj_in=PlaylistHasVideoCreate(
                    playlist_id=playlist_id, video_id=video_id
                ),
            ),
            "PlaylistHasVideo",
            playlist_id,
        )
        logger.info("Playlist %s: added video %s", playlist_id, video_id)
        return ToggleResult(active=True, created=created)

    async def set_playlist_video(
        self,
        session: AsyncSession,
        playlist_id: str,
        video_id: str,
        present: bool,
    ) -> ToggleResult[PlaylistHasVideoDB]:
        """
        Force a membership into a given state.

        Used to keep system playlists in step with reactions: unlike a
        toggle, calling this twice with the same ``present`` is a no-op.
        """
        repo = self._playlist_membership_repo
        exists = await repo.membership_exists(session, playlist_id, video_id)
        if exists == present:
            return ToggleResult(active=present)
        return await self.toggle_playlist_video(session, playlist_id, video_id)
