"""
Engagement models.

Defines Pydantic models for engagement facts (video likes/dislikes/views,
follows, announcement reactions) and playlist membership rows.

Engagement types are stored as their string values.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import EngagementType


class VideoEngagementCreate(BaseModel):
    """Model for creating a video engagement fact."""

    video_id: str = Field(..., min_length=1)
    user_id: Optional[str] = Field(default=None, description="NULL for anonymous views")
    engagement_type: EngagementType

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("engagement_type")
    @classmethod
    def validate_engagement_type(cls, v: str) -> str:
        """Only LIKE, DISLIKE and VIEW apply to videos."""
        if v == EngagementType.FOLLOW:
            raise ValueError("FOLLOW is not a video engagement")
        return v

    @model_validator(mode="after")
    def require_user_for_reactions(self) -> "VideoEngagementCreate":
        """Reactions always belong to a user; only views may be anonymous."""
        if self.engagement_type != EngagementType.VIEW and not self.user_id:
            raise ValueError(f"{self.engagement_type} requires a user_id")
        return self


class AnnouncementEngagementCreate(BaseModel):
    """Model for creating an announcement reaction."""

    announcement_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    engagement_type: EngagementType

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("engagement_type")
    @classmethod
    def validate_engagement_type(cls, v: str) -> str:
        """Announcements only carry LIKE and DISLIKE."""
        if v not in (EngagementType.LIKE, EngagementType.DISLIKE):
            raise ValueError(f"{v} is not an announcement engagement")
        return v


class FollowEngagementCreate(BaseModel):
    """Model for creating a follow fact."""

    follower_id: str = Field(..., min_length=1)
    following_id: str = Field(..., min_length=1)
    engagement_type: EngagementType = EngagementType.FOLLOW

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    @model_validator(mode="after")
    def reject_self_follow(self) -> "FollowEngagementCreate":
        """A user cannot follow themselves."""
        if self.follower_id == self.following_id:
            raise ValueError("Users cannot follow themselves")
        return self


class PlaylistHasVideoCreate(BaseModel):
    """Model for adding a video to a playlist."""

    playlist_id: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)
