"""
Playlist models.

Defines Pydantic models for user playlists.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PlaylistCreate(BaseModel):
    """Model for creating playlists."""

    user_id: str = Field(..., min_length=1, description="Owner user ID")
    title: str = Field(..., min_length=1, max_length=255, description="Playlist title")
    description: Optional[str] = Field(
        default=None, min_length=5, max_length=50, description="Playlist description"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate playlist title."""
        if not v.strip():
            raise ValueError("Playlist title cannot be empty")
        return v
