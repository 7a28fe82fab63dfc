"""
Follow engagement repository implementation.

A follow fact is directed: ``follower_id`` follows ``following_id``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..db.models import FollowEngagement as DBFollowEngagement
from ..models.engagement import FollowEngagementCreate
from .base import BaseSQLAlchemyRepository


class FollowEngagementRepository(
    BaseSQLAlchemyRepository[DBFollowEngagement, FollowEngagementCreate, dict]
):
    """Repository for follow facts between users."""

    def __init__(self) -> None:
        super().__init__(DBFollowEngagement)

    async def find_pair(
        self, session: AsyncSession, follower_id: str, following_id: str
    ) -> Optional[DBFollowEngagement]:
        """Get the follow fact for a (follower, following) pair, if any."""
        result = await session.execute(
            select(DBFollowEngagement).where(
                DBFollowEngagement.follower_id == follower_id,
                DBFollowEngagement.following_id == following_id,
            )
        )
        return result.scalar_one_or_none()

    async def delete_pair(
        self, session: AsyncSession, follower_id: str, following_id: str
    ) -> int:
        """Delete the follow fact for a pair; returns rows removed."""
        result = await session.execute(
            delete(DBFollowEngagement).where(
                DBFollowEngagement.follower_id == follower_id,
                DBFollowEngagement.following_id == following_id,
            )
        )
        return result.rowcount or 0

    async def count_followers(
        self, session: AsyncSession, user_ids: Sequence[str]
    ) -> Dict[str, int]:
        """
        Count followers per user: rows where the user is the followed side.

        Args:
            session: Database session
            user_ids: Users to count for

        Returns:
            Mapping of user id to follower count; users without followers
            are absent
        """
        if not user_ids:
            return {}
        result = await session.execute(
            select(DBFollowEngagement.following_id, func.count())
            .where(DBFollowEngagement.following_id.in_(list(user_ids)))
            .group_by(DBFollowEngagement.following_id)
        )
        return {user_id: count for user_id, count in result.all()}

    async def count_following(
        self, session: AsyncSession, user_ids: Sequence[str]
    ) -> Dict[str, int]:
        """Count how many users each user follows."""
        if not user_ids:
            return {}
        result = await session.execute(
            select(DBFollowEngagement.follower_id, func.count())
            .where(DBFollowEngagement.follower_id.in_(list(user_ids)))
            .group_by(DBFollowEngagement.follower_id)
        )
        return {user_id: count for user_id, count in result.all()}

    async def followed_among(
        self, session: AsyncSession, follower_id: str, user_ids: Sequence[str]
    ) -> Set[str]:
        """Subset of ``user_ids`` that ``follower_id`` follows."""
        if not user_ids:
            return set()
        result = await session.execute(
            select(DBFollowEngagement.following_id).where(
                DBFollowEngagement.follower_id == follower_id,
                DBFollowEngagement.following_id.in_(list(user_ids)),
            )
        )
        return set(result.scalars().all())

    async def get_followings(
        self, session: AsyncSession, follower_id: str
    ) -> List[DBFollowEngagement]:
        """Follow facts of a user, followed users loaded, oldest first."""
        result = await session.execute(
            select(DBFollowEngagement)
            .where(DBFollowEngagement.follower_id == follower_id)
            .options(selectinload(DBFollowEngagement.following))
            .order_by(DBFollowEngagement.created_at, DBFollowEngagement.id)
        )
        return list(result.scalars().all())
