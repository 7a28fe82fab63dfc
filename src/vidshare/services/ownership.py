"""
Ownership checks for owner-only mutations.

A missing entity and an entity owned by someone else are reported the same
way, as NotFoundError.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.db.models import Video as VideoDB
from vidshare.exceptions import NotFoundError
from vidshare.repositories.video_repository import VideoRepository

logger = logging.getLogger(__name__)


async def get_owned_video(
    session: AsyncSession,
    video_id: str,
    owner_id: str,
    repository: Optional[VideoRepository] = None,
) -> VideoDB:
    """
    Load a video that must belong to ``owner_id``.

    Parameters
    ----------
    session : AsyncSession
        Database session.
    video_id : str
        Video to load.
    owner_id : str
        Expected owner.
    repository : Optional[VideoRepository]
        Repository to use (a new one when omitted).

    Returns
    -------
    VideoDB
        The owned video.

    Raises
    ------
    NotFoundError
        If the video does not exist or has another owner.
    """
    repo = repository or VideoRepository()
    video = await repo.get(session, video_id)
    if video is None:
        raise NotFoundError(resource_type="Video", identifier=video_id)
    if video.user_id != owner_id:
        logger.info(
            "Ownership check failed: video %s requested by %s", video_id, owner_id
        )
        raise NotFoundError(resource_type="Video", identifier=video_id)
    return video
