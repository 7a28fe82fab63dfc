"""
Video repository implementation.

Provides data access layer for videos with published/draft filtering,
title search and per-author listings.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..db.models import Video as DBVideo
from ..models.video import VideoCreate, VideoUpdate
from .base import BaseSQLAlchemyRepository

SEARCH_RESULT_LIMIT = 10


class VideoRepository(BaseSQLAlchemyRepository[DBVideo, VideoCreate, VideoUpdate]):
    """Repository for video entities."""

    def __init__(self) -> None:
        super().__init__(DBVideo)

    async def get_with_user(self, session: AsyncSession, video_id: str) -> DBVideo | None:
        """
        Get a video with its author eagerly loaded.

        Args:
            session: Database session
            video_id: Video id

        Returns:
            The video (with ``user`` populated) or None if unknown
        """
        result = await session.execute(
            select(DBVideo)
            .where(DBVideo.id == video_id)
            .options(selectinload(DBVideo.user))
        )
        return result.scalar_one_or_none()

    async def find_published(self, session: AsyncSession) -> List[DBVideo]:
        """Every published video, authors loaded, in storage order."""
        result = await session.execute(
            select(DBVideo)
            .where(DBVideo.publish.is_(True))
            .options(selectinload(DBVideo.user))
        )
        return list(result.scalars().all())

    async def search_published(
        self,
        session: AsyncSession,
        query: str,
        limit: int = SEARCH_RESULT_LIMIT,
    ) -> List[DBVideo]:
        """
        Find published videos whose title contains ``query``.

        ``%`` and ``_`` in the query match literally. Case sensitivity
        follows the database collation.

        Args:
            session: Database session
            query: Substring to look for in titles
            limit: Maximum number of results

        Returns:
            Up to ``limit`` matching videos with authors loaded
        """
        result = await session.execute(
            select(DBVideo)
            .where(
                DBVideo.publish.is_(True),
                DBVideo.title.contains(query, autoescape=True),
            )
            .options(selectinload(DBVideo.user))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def find_published_by_user(
        self, session: AsyncSession, user_id: str
    ) -> List[DBVideo]:
        """Published videos of one author, author loaded."""
        result = await session.execute(
            select(DBVideo)
            .where(DBVideo.user_id == user_id, DBVideo.publish.is_(True))
            .options(selectinload(DBVideo.user))
        )
        return list(result.scalars().all())

    async def find_by_user(self, session: AsyncSession, user_id: str) -> List[DBVideo]:
        """All videos of one author, drafts included."""
        result = await session.execute(
            select(DBVideo).where(DBVideo.user_id == user_id)
        )
        return list(result.scalars().all())
