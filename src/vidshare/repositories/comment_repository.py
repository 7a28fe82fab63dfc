"""
Comment repository implementation.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..db.models import Comment as DBComment
from ..models.comment import CommentCreate
from .base import BaseSQLAlchemyRepository


class CommentRepository(BaseSQLAlchemyRepository[DBComment, CommentCreate, dict]):
    """Repository for video comments."""

    def __init__(self) -> None:
        super().__init__(DBComment)

    async def find_by_video(
        self, session: AsyncSession, video_id: str
    ) -> List[DBComment]:
        """
        Get every comment on a video with its author loaded.

        Args:
            session: Database session
            video_id: Video id

        Returns:
            Comments oldest first
        """
        result = await session.execute(
            select(DBComment)
            .where(DBComment.video_id == video_id)
            .options(selectinload(DBComment.user))
            .order_by(DBComment.created_at, DBComment.id)
        )
        return list(result.scalars().all())
