"""
Video engagement repository implementation.

Stores LIKE, DISLIKE and VIEW facts for videos and answers the count and
existence queries the enrichment layer needs.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Set

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import VideoEngagement as DBVideoEngagement
from ..models.engagement import VideoEngagementCreate
from ..models.enums import EngagementType
from .base import BaseSQLAlchemyRepository


class VideoEngagementRepository(
    BaseSQLAlchemyRepository[DBVideoEngagement, VideoEngagementCreate, dict]
):
    """Repository for video engagement facts."""

    def __init__(self) -> None:
        super().__init__(DBVideoEngagement)

    async def find(
        self,
        session: AsyncSession,
        video_id: str,
        user_id: str,
        engagement_type: EngagementType,
    ) -> Optional[DBVideoEngagement]:
        """Get the first fact of a kind for (video, user), if any."""
        result = await session.execute(
            select(DBVideoEngagement)
            .where(
                DBVideoEngagement.video_id == video_id,
                DBVideoEngagement.user_id == user_id,
                DBVideoEngagement.engagement_type == engagement_type.value,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_matching(
        self,
        session: AsyncSession,
        video_id: str,
        user_id: str,
        engagement_type: EngagementType,
    ) -> int:
        """
        Delete every fact of a kind for (video, user).

        Args:
            session: Database session
            video_id: Video id
            user_id: Acting user id
            engagement_type: Kind of fact to remove

        Returns:
            Number of rows deleted
        """
        result = await session.execute(
            delete(DBVideoEngagement).where(
                DBVideoEngagement.video_id == video_id,
                DBVideoEngagement.user_id == user_id,
                DBVideoEngagement.engagement_type == engagement_type.value,
            )
        )
        return result.rowcount or 0

    async def count_by_video(
        self,
        session: AsyncSession,
        video_ids: Sequence[str],
        engagement_type: EngagementType,
    ) -> Dict[str, int]:
        """
        Count facts of one kind per video in a single grouped query.

        Videos with no matching facts are absent from the result.
        """
        if not video_ids:
            return {}
        result = await session.execute(
            select(DBVideoEngagement.video_id, func.count())
            .where(
                DBVideoEngagement.video_id.in_(list(video_ids)),
                DBVideoEngagement.engagement_type == engagement_type.value,
            )
            .group_by(DBVideoEngagement.video_id)
        )
        return {video_id: count for video_id, count in result.all()}

    async def kinds_for_user(
        self, session: AsyncSession, video_id: str, user_id: str
    ) -> Set[str]:
        """Distinct engagement kinds a user holds on a video."""
        result = await session.execute(
            select(DBVideoEngagement.engagement_type)
            .where(
                DBVideoEngagement.video_id == video_id,
                DBVideoEngagement.user_id == user_id,
            )
            .distinct()
        )
        return set(result.scalars().all())
