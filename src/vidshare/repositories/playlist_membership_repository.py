"""
Repository for playlist membership operations.

Handles playlist-video join rows and the per-playlist aggregates used by
the playlist listings.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..db.models import PlaylistHasVideo as DBPlaylistHasVideo
from ..db.models import Video as DBVideo
from ..models.engagement import PlaylistHasVideoCreate
from .base import BaseSQLAlchemyRepository


class PlaylistMembershipRepository(
    BaseSQLAlchemyRepository[DBPlaylistHasVideo, PlaylistHasVideoCreate, dict]
):
    """Repository for playlist membership operations with specialized queries."""

    def __init__(self) -> None:
        super().__init__(DBPlaylistHasVideo)

    async def get_membership(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> Optional[DBPlaylistHasVideo]:
        """
        Get specific playlist membership.

        Args:
            session: Database session
            playlist_id: Playlist id
            video_id: Video id

        Returns:
            Playlist membership if exists, None otherwise
        """
        return await session.get(DBPlaylistHasVideo, (playlist_id, video_id))

    async def membership_exists(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> bool:
        """Check if video is already in playlist."""
        return await self.get_membership(session, playlist_id, video_id) is not None

    async def delete_membership(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> int:
        """Remove a video from a playlist; returns rows removed."""
        result = await session.execute(
            delete(DBPlaylistHasVideo).where(
                DBPlaylistHasVideo.playlist_id == playlist_id,
                DBPlaylistHasVideo.video_id == video_id,
            )
        )
        return result.rowcount or 0

    async def get_playlist_videos(
        self, session: AsyncSession, playlist_id: str
    ) -> List[DBPlaylistHasVideo]:
        """
        Get all videos in a playlist, ordered by membership time.

        Args:
            session: Database session
            playlist_id: Playlist id

        Returns:
            Memberships with the video and its author loaded
        """
        result = await session.execute(
            select(DBPlaylistHasVideo)
            .where(DBPlaylistHasVideo.playlist_id == playlist_id)
            .options(
                selectinload(DBPlaylistHasVideo.video).selectinload(DBVideo.user)
            )
            .order_by(DBPlaylistHasVideo.created_at)
        )
        return list(result.scalars().all())

    async def video_ids_by_playlist(
        self, session: AsyncSession, playlist_ids: Sequence[str]
    ) -> Dict[str, List[str]]:
        """Member video ids per playlist; every requested id is present."""
        grouped: Dict[str, List[str]] = {pid: [] for pid in playlist_ids}
        if not playlist_ids:
            return grouped
        result = await session.execute(
            select(DBPlaylistHasVideo.playlist_id, DBPlaylistHasVideo.video_id)
            .where(DBPlaylistHasVideo.playlist_id.in_(list(playlist_ids)))
            .order_by(DBPlaylistHasVideo.created_at)
        )
        for playlist_id, video_id in result.all():
            grouped[playlist_id].append(video_id)
        return grouped

    async def count_by_playlist(
        self, session: AsyncSession, playlist_ids: Sequence[str]
    ) -> Dict[str, int]:
        """Number of member videos per playlist; empty playlists are absent."""
        if not playlist_ids:
            return {}
        result = await session.execute(
            select(DBPlaylistHasVideo.playlist_id, func.count())
            .where(DBPlaylistHasVideo.playlist_id.in_(list(playlist_ids)))
            .group_by(DBPlaylistHasVideo.playlist_id)
        )
        return {playlist_id: count for playlist_id, count in result.all()}

    async def first_thumbnails(
        self, session: AsyncSession, playlist_ids: Sequence[str]
    ) -> Dict[str, Optional[str]]:
        """
        Thumbnail of the earliest-added video per playlist.

        Empty playlists are absent from the result.
        """
        if not playlist_ids:
            return {}
        result = await session.execute(
            select(DBPlaylistHasVideo.playlist_id, DBVideo.thumbnail_url)
            .join(DBVideo, DBVideo.id == DBPlaylistHasVideo.video_id)
            .where(DBPlaylistHasVideo.playlist_id.in_(list(playlist_ids)))
            .order_by(DBPlaylistHasVideo.playlist_id, DBPlaylistHasVideo.created_at)
        )
        thumbnails: Dict[str, Optional[str]] = {}
        for playlist_id, thumbnail_url in result.all():
            thumbnails.setdefault(playlist_id, thumbnail_url)
        return thumbnails
