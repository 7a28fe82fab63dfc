"""Video API schemas.

Response shapes for the video procedures. Lists of videos are returned
alongside a positionally aligned list of their authors.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vidshare.api.schemas.base import CamelModel
from vidshare.api.schemas.comments import CommentWithUser
from vidshare.api.schemas.users import UserResponse, UserWithFollowers


class VideoResponse(CamelModel):
    """A stored video."""

    id: str = Field(..., description="Video ID")
    user_id: str = Field(..., description="Owner user ID")
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    publish: bool = Field(False, description="Whether the video is public")
    created_at: Optional[datetime] = None


class VideoWithViews(VideoResponse):
    """Video enriched with its view count."""

    views: int = Field(0, ge=0)


class VideoWithCounts(VideoWithViews):
    """Video enriched with view, like and dislike counts."""

    likes: int = Field(0, ge=0)
    dislikes: int = Field(0, ge=0)


class VideoViewer(CamelModel):
    """What the viewer has done to a video and its owner."""

    has_followed: bool = False
    has_liked: bool = False
    has_disliked: bool = False


class VideoDetailResponse(CamelModel):
    """Response for getVideoById."""

    video: VideoWithCounts
    user: UserWithFollowers
    comments: List[CommentWithUser]
    viewer: VideoViewer


class VideoListResponse(CamelModel):
    """Videos with views and their authors; ``users[i]`` wrote ``videos[i]``."""

    videos: List[VideoWithViews]
    users: List[UserResponse]


# Requests


class CreateVideoRequest(CamelModel):
    """Body of createVideo."""

    user_id: str = Field(..., min_length=1)
    video_url: str = Field(..., min_length=1)


class UpdateVideoRequest(CamelModel):
    """Body of updateVideo; omitted fields keep their stored value."""

    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None


class VideoOwnerRequest(CamelModel):
    """Body of publishVideo and deleteVideo."""

    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)


class AddVideoToPlaylistRequest(CamelModel):
    """Body of addVideoToPlaylist."""

    playlist_id: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)
