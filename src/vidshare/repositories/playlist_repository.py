"""
Playlist repository implementation.

Covers user playlists and the reserved system playlists ("Liked Videos",
"History") that the engagement procedures maintain.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..db.models import Playlist as DBPlaylist
from ..models.playlist import PlaylistCreate
from .base import BaseSQLAlchemyRepository


class PlaylistRepository(BaseSQLAlchemyRepository[DBPlaylist, PlaylistCreate, dict]):
    """Repository for playlists."""

    def __init__(self) -> None:
        super().__init__(DBPlaylist)

    async def get_with_user(
        self, session: AsyncSession, playlist_id: str
    ) -> Optional[DBPlaylist]:
        """Get a playlist with its owner eagerly loaded."""
        result = await session.execute(
            select(DBPlaylist)
            .where(DBPlaylist.id == playlist_id)
            .options(selectinload(DBPlaylist.user))
        )
        return result.scalar_one_or_none()

    async def find_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        exclude_titles: Iterable[str] = (),
    ) -> List[DBPlaylist]:
        """
        Get the playlists of a user.

        Parameters
        ----------
        session : AsyncSession
            Database session.
        user_id : str
            Owner id.
        exclude_titles : Iterable[str]
            Titles to leave out (used to hide the system playlists).

        Returns
        -------
        List[DBPlaylist]
            Playlists oldest first.
        """
        stmt = select(DBPlaylist).where(DBPlaylist.user_id == user_id)
        excluded = list(exclude_titles)
        if excluded:
            stmt = stmt.where(DBPlaylist.title.not_in(excluded))
        result = await session.execute(
            stmt.order_by(DBPlaylist.created_at, DBPlaylist.id)
        )
        return list(result.scalars().all())

    async def get_by_title(
        self, session: AsyncSession, user_id: str, title: str
    ) -> Optional[DBPlaylist]:
        """First playlist of a user with an exact title."""
        result = await session.execute(
            select(DBPlaylist)
            .where(DBPlaylist.user_id == user_id, DBPlaylist.title == title)
            .order_by(DBPlaylist.created_at, DBPlaylist.id)
            .limit(1)
        )
        return result.scalar_one_or_none()
