"""Playlist API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vidshare.api.schemas.base import CamelModel
from vidshare.api.schemas.users import UserResponse, UserWithFollowers
from vidshare.api.schemas.videos import VideoWithViews


class PlaylistResponse(CamelModel):
    """A stored playlist."""

    id: str = Field(..., description="Playlist ID")
    user_id: str = Field(..., description="Owner user ID")
    title: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class PlaylistWithVideoIds(PlaylistResponse):
    """Playlist with the ids of its member videos (save-to-playlist menu)."""

    video_ids: List[str] = Field(default_factory=list)


class PlaylistSummary(CamelModel):
    """Playlist card: count and the thumbnail of the earliest-added video."""

    playlist: PlaylistResponse
    video_count: int = Field(0, ge=0)
    thumbnail_url: Optional[str] = None


class PlaylistDetailResponse(CamelModel):
    """Response for getPlaylistById; ``authors[i]`` wrote ``videos[i]``."""

    playlist: PlaylistResponse
    user: UserWithFollowers
    videos: List[VideoWithViews]
    authors: List[UserResponse]


class AddPlaylistRequest(CamelModel):
    """Body of addPlaylist."""

    title: str = Field(..., min_length=1, max_length=255)
    user_id: str = Field(..., min_length=1)
    description: Optional[str] = Field(None, min_length=5, max_length=50)
