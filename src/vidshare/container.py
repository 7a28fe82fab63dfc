"""
Object wiring for vidshare procedures.

Repositories are cheap and stateless, so every ``create_*_repository``
call returns a fresh one. The three services share repositories and are
built once per container on first access. The database manager is not
held here; it lives on ``app.state``.

    >>> from vidshare.container import container
    >>> container.engagement_toggler is container.engagement_toggler
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Optional

from vidshare.repositories import (
    AnnouncementEngagementRepository,
    AnnouncementRepository,
    CommentRepository,
    FollowEngagementRepository,
    PlaylistMembershipRepository,
    PlaylistRepository,
    SessionRepository,
    UserRepository,
    VideoEngagementRepository,
    VideoRepository,
)
from vidshare.services.engagement_toggler import EngagementToggler
from vidshare.services.enrichment import AggregateEnricher
from vidshare.services.system_playlists import SystemPlaylistService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class RequestContext:
    """
    What a procedure receives: the request's session and, on protected
    procedures, the id of the user the session token belongs to.
    """

    session: "AsyncSession"
    user_id: Optional[str] = None


class Container:
    """Factory for repositories and holder of the shared services."""

    _SERVICES = ("engagement_toggler", "aggregate_enricher", "system_playlists")

    def create_user_repository(self) -> UserRepository:
        return UserRepository()

    def create_session_repository(self) -> SessionRepository:
        return SessionRepository()

    def create_video_repository(self) -> VideoRepository:
        return VideoRepository()

    def create_video_engagement_repository(self) -> VideoEngagementRepository:
        return VideoEngagementRepository()

    def create_follow_engagement_repository(self) -> FollowEngagementRepository:
        return FollowEngagementRepository()

    def create_announcement_repository(self) -> AnnouncementRepository:
        return AnnouncementRepository()

    def create_announcement_engagement_repository(
        self,
    ) -> AnnouncementEngagementRepository:
        return AnnouncementEngagementRepository()

    def create_comment_repository(self) -> CommentRepository:
        return CommentRepository()

    def create_playlist_repository(self) -> PlaylistRepository:
        return PlaylistRepository()

    def create_playlist_membership_repository(self) -> PlaylistMembershipRepository:
        return PlaylistMembershipRepository()

    @cached_property
    def engagement_toggler(self) -> EngagementToggler:
        """Flips likes, dislikes, follows and playlist membership."""
        return EngagementToggler(
            video_engagement_repo=self.create_video_engagement_repository(),
            announcement_engagement_repo=self.create_announcement_engagement_repository(),
            follow_engagement_repo=self.create_follow_engagement_repository(),
            playlist_membership_repo=self.create_playlist_membership_repository(),
        )

    @cached_property
    def aggregate_enricher(self) -> AggregateEnricher:
        """Adds counts and viewer flags to listings."""
        return AggregateEnricher(
            video_engagement_repo=self.create_video_engagement_repository(),
            follow_engagement_repo=self.create_follow_engagement_repository(),
            announcement_engagement_repo=self.create_announcement_engagement_repository(),
        )

    @cached_property
    def system_playlists(self) -> SystemPlaylistService:
        """Keeps Liked Videos and History in step with engagements."""
        return SystemPlaylistService(
            playlist_repo=self.create_playlist_repository(),
            toggler=self.engagement_toggler,
        )

    def reset(self) -> None:
        """Forget built services so the next access rebuilds them."""
        for name in self._SERVICES:
            self.__dict__.pop(name, None)


container = Container()
