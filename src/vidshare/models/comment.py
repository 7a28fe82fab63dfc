"""Comment models."""

from __future__ import annotations

from pydantic import BaseModel, Field

COMMENT_MIN_LENGTH = 5
COMMENT_MAX_LENGTH = 200


class CommentCreate(BaseModel):
    """Model for creating comments."""

    video_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    message: str = Field(
        ..., min_length=COMMENT_MIN_LENGTH, max_length=COMMENT_MAX_LENGTH
    )
