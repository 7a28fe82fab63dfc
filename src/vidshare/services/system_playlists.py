"""
System playlist maintenance.

"Liked Videos" follows the user's active LIKEs and "History" collects the
videos the user has viewed. Both are created on first use.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.db.models import Playlist as PlaylistDB
from vidshare.models.enums import SystemPlaylist
from vidshare.models.playlist import PlaylistCreate
from vidshare.repositories.playlist_repository import PlaylistRepository
from vidshare.services.engagement_toggler import EngagementToggler

logger = logging.getLogger(__name__)


class SystemPlaylistService:
    """Keeps the reserved playlists in step with engagement."""

    def __init__(
        self, playlist_repo: PlaylistRepository, toggler: EngagementToggler
    ) -> None:
        self._playlist_repo = playlist_repo
        self._toggler = toggler

    async def get_or_create(
        self, session: AsyncSession, user_id: str, kind: SystemPlaylist
    ) -> PlaylistDB:
        """Return the user's system playlist, creating it when missing."""
        playlist = await self._playlist_repo.get_by_title(session, user_id, kind.value)
        if playlist is not None:
            return playlist
        logger.info("Creating %r playlist for user %s", kind.value, user_id)
        return await self._playlist_repo.create(
            session, obj_in=PlaylistCreate(user_id=user_id, title=kind.value)
        )

    async def sync_video(
        self,
        session: AsyncSession,
        user_id: str,
        kind: SystemPlaylist,
        video_id: str,
        present: bool,
    ) -> Optional[PlaylistDB]:
        """
        Make ``video_id`` a member of the playlist, or not.

        Removing from a playlist the user never had is a no-op; the playlist
        is only created when a video has to be added to it.

        Parameters
        ----------
        session : AsyncSession
            Database session.
        user_id : str
            Playlist owner.
        kind : SystemPlaylist
            Which system playlist.
        video_id : str
            Video to add or remove.
        present : bool
            Desired membership.

        Returns
        -------
        Optional[PlaylistDB]
            The system playlist, or None when there was nothing to remove from.
        """
        if present:
            playlist = await self.get_or_create(session, user_id, kind)
        else:
            playlist = await self._playlist_repo.get_by_title(
                session, user_id, kind.value
            )
            if playlist is None:
                return None
        await self._toggler.set_playlist_video(session, playlist.id, video_id, present)
        return playlist
