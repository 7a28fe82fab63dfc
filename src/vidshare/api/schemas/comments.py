"""Comment API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from vidshare.api.schemas.base import CamelModel
from vidshare.models.comment import COMMENT_MAX_LENGTH, COMMENT_MIN_LENGTH


class CommentResponse(CamelModel):
    """A stored comment."""

    id: str
    video_id: str
    user_id: str
    message: str
    created_at: Optional[datetime] = None


class CommentAuthor(CamelModel):
    """Author summary shown next to a comment."""

    id: str
    name: Optional[str] = None
    image: Optional[str] = None
    handle: Optional[str] = None


class CommentWithUser(CamelModel):
    """A comment paired with its author."""

    user: CommentAuthor
    comment: CommentResponse


class AddCommentRequest(CamelModel):
    """Body of addComment."""

    video_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    message: str = Field(
        ..., min_length=COMMENT_MIN_LENGTH, max_length=COMMENT_MAX_LENGTH
    )
