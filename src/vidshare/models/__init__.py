"""
Pydantic models for vidshare.

Domain models used to validate data before it is written through the
repositories.
"""

from __future__ import annotations

from .announcement import AnnouncementCreate
from .comment import CommentCreate
from .engagement import (
    AnnouncementEngagementCreate,
    FollowEngagementCreate,
    PlaylistHasVideoCreate,
    VideoEngagementCreate,
)
from .enums import EngagementType, SystemPlaylist
from .playlist import PlaylistCreate
from .session import SessionCreate
from .user import UserCreate, UserUpdate
from .video import VideoCreate, VideoUpdate

__all__ = [
    "AnnouncementCreate",
    "AnnouncementEngagementCreate",
    "CommentCreate",
    "EngagementType",
    "FollowEngagementCreate",
    "PlaylistCreate",
    "PlaylistHasVideoCreate",
    "SessionCreate",
    "SystemPlaylist",
    "UserCreate",
    "UserUpdate",
    "VideoCreate",
    "VideoEngagementCreate",
    "VideoUpdate",
]
