"""Announcement API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vidshare.api.schemas.base import CamelModel
from vidshare.api.schemas.users import UserResponse
from vidshare.models.announcement import (
    ANNOUNCEMENT_MAX_LENGTH,
    ANNOUNCEMENT_MIN_LENGTH,
)


class AnnouncementResponse(CamelModel):
    """A stored announcement."""

    id: str
    user_id: str
    message: str
    created_at: Optional[datetime] = None


class AnnouncementViewer(CamelModel):
    """The viewer's reactions to an announcement."""

    has_liked: bool = False
    has_disliked: bool = False


class AnnouncementWithEngagement(AnnouncementResponse):
    """Announcement enriched with reaction counts and viewer flags."""

    likes: int = Field(0, ge=0)
    dislikes: int = Field(0, ge=0)
    viewer: AnnouncementViewer = Field(default_factory=AnnouncementViewer)


class AnnouncementsResponse(CamelModel):
    """Response for getAnnoucementsByUserId."""

    user: Optional[UserResponse] = None
    announcements: List[AnnouncementWithEngagement]


class AddAnnouncementRequest(CamelModel):
    """Body of addAnnouncement."""

    user_id: str = Field(..., min_length=1)
    message: str = Field(
        ..., min_length=ANNOUNCEMENT_MIN_LENGTH, max_length=ANNOUNCEMENT_MAX_LENGTH
    )
