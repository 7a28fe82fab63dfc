"""
Video models.

Defines Pydantic models for creating and updating videos.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoCreate(BaseModel):
    """Model for creating videos; new uploads start as drafts."""

    user_id: str = Field(..., min_length=1, description="Owner user ID")
    video_url: str = Field(..., min_length=1, description="Uploaded video URL")
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    publish: bool = Field(default=False, description="Draft until published")


class VideoUpdate(BaseModel):
    """Model for updating videos."""

    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    publish: Optional[bool] = None

    model_config = ConfigDict(
        validate_assignment=True,
    )
