"""
Announcement repository implementation.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import Announcement as DBAnnouncement
from ..models.announcement import AnnouncementCreate
from .base import BaseSQLAlchemyRepository


class AnnouncementRepository(
    BaseSQLAlchemyRepository[DBAnnouncement, AnnouncementCreate, dict]
):
    """Repository for channel announcements."""

    def __init__(self) -> None:
        super().__init__(DBAnnouncement)

    async def find_by_user(
        self, session: AsyncSession, user_id: str
    ) -> List[DBAnnouncement]:
        """Announcements posted by a user, oldest first."""
        result = await session.execute(
            select(DBAnnouncement)
            .where(DBAnnouncement.user_id == user_id)
            .order_by(DBAnnouncement.created_at, DBAnnouncement.id)
        )
        return list(result.scalars().all())
