"""
Announcement engagement repository implementation.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Set, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import AnnouncementEngagement as DBAnnouncementEngagement
from ..models.engagement import AnnouncementEngagementCreate
from ..models.enums import EngagementType
from .base import BaseSQLAlchemyRepository


class AnnouncementEngagementRepository(
    BaseSQLAlchemyRepository[
        DBAnnouncementEngagement, AnnouncementEngagementCreate, dict
    ]
):
    """Repository for LIKE/DISLIKE facts on announcements."""

    def __init__(self) -> None:
        super().__init__(DBAnnouncementEngagement)

    async def find(
        self,
        session: AsyncSession,
        announcement_id: str,
        user_id: str,
        engagement_type: EngagementType,
    ) -> Optional[DBAnnouncementEngagement]:
        """Get the fact of a kind for (announcement, user), if any."""
        result = await session.execute(
            select(DBAnnouncementEngagement)
            .where(
                DBAnnouncementEngagement.announcement_id == announcement_id,
                DBAnnouncementEngagement.user_id == user_id,
                DBAnnouncementEngagement.engagement_type == engagement_type.value,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_matching(
        self,
        session: AsyncSession,
        announcement_id: str,
        user_id: str,
        engagement_type: EngagementType,
    ) -> int:
        """Delete every fact of a kind for (announcement, user)."""
        result = await session.execute(
            delete(DBAnnouncementEngagement).where(
                DBAnnouncementEngagement.announcement_id == announcement_id,
                DBAnnouncementEngagement.user_id == user_id,
                DBAnnouncementEngagement.engagement_type == engagement_type.value,
            )
        )
        return result.rowcount or 0

    async def count_by_announcement(
        self,
        session: AsyncSession,
        announcement_ids: Sequence[str],
        engagement_type: EngagementType,
    ) -> Dict[str, int]:
        """Count facts of one kind per announcement in a grouped query."""
        if not announcement_ids:
            return {}
        result = await session.execute(
            select(DBAnnouncementEngagement.announcement_id, func.count())
            .where(
                DBAnnouncementEngagement.announcement_id.in_(list(announcement_ids)),
                DBAnnouncementEngagement.engagement_type == engagement_type.value,
            )
            .group_by(DBAnnouncementEngagement.announcement_id)
        )
        return {announcement_id: count for announcement_id, count in result.all()}

    async def kinds_for_user(
        self,
        session: AsyncSession,
        announcement_ids: Sequence[str],
        user_id: str,
    ) -> Set[Tuple[str, str]]:
        """(announcement_id, engagement_type) pairs a user holds."""
        if not announcement_ids:
            return set()
        result = await session.execute(
            select(
                DBAnnouncementEngagement.announcement_id,
                DBAnnouncementEngagement.engagement_type,
            )
            .where(
                DBAnnouncementEngagement.announcement_id.in_(list(announcement_ids)),
                DBAnnouncementEngagement.user_id == user_id,
            )
            .distinct()
        )
        return {(row[0], row[1]) for row in result.all()}
