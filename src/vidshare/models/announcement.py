"""Announcement models."""

from __future__ import annotations

from pydantic import BaseModel, Field

ANNOUNCEMENT_MIN_LENGTH = 5
ANNOUNCEMENT_MAX_LENGTH = 200


class AnnouncementCreate(BaseModel):
    """Model for creating announcements."""

    user_id: str = Field(..., min_length=1)
    message: str = Field(
        ..., min_length=ANNOUNCEMENT_MIN_LENGTH, max_length=ANNOUNCEMENT_MAX_LENGTH
    )
