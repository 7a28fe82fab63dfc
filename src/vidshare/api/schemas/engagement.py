"""Engagement API schemas, including the shared toggle envelope."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import Field

from vidshare.api.schemas.base import CamelModel

T = TypeVar("T")


class VideoEngagementResponse(CamelModel):
    """A LIKE, DISLIKE or VIEW fact."""

    id: str
    video_id: str
    user_id: Optional[str] = None
    engagement_type: str
    created_at: Optional[datetime] = None


class FollowEngagementResponse(CamelModel):
    """A follow fact."""

    id: str
    follower_id: str
    following_id: str
    engagement_type: str
    created_at: Optional[datetime] = None


class AnnouncementEngagementResponse(CamelModel):
    """A LIKE or DISLIKE fact on an announcement."""

    id: str
    announcement_id: str
    user_id: str
    engagement_type: str
    created_at: Optional[datetime] = None


class PlaylistHasVideoResponse(CamelModel):
    """A playlist membership row."""

    playlist_id: str
    video_id: str
    created_at: Optional[datetime] = None


class ToggleResponse(CamelModel, Generic[T]):
    """
    Outcome of a toggle procedure.

    Attributes
    ----------
    active : bool
        Whether the fact exists after the call.
    deleted_count : int
        Rows of the requested kind removed (toggle off).
    opposing_removed : int
        Rows of the opposing kind removed (LIKE/DISLIKE only).
    engagement : Optional[T]
        The row created when the toggle switched on.
    """

    active: bool
    deleted_count: int = Field(0, ge=0)
    opposing_removed: int = Field(0, ge=0)
    engagement: Optional[T] = None


# Requests


class EngagementRequest(CamelModel):
    """Body of the like/dislike procedures: subject ``id`` and acting user."""

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class ViewCountRequest(CamelModel):
    """Body of addViewCount; anonymous viewers omit ``userId``."""

    id: str = Field(..., min_length=1)
    user_id: Optional[str] = None
