"""User API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vidshare.api.schemas.base import CamelModel


class UserResponse(CamelModel):
    """Public profile of a user."""

    id: str = Field(..., description="User ID")
    name: Optional[str] = None
    email: Optional[str] = None
    email_verified: Optional[datetime] = None
    image: Optional[str] = Field(None, description="Avatar URL")
    background_image: Optional[str] = Field(None, description="Channel banner URL")
    handle: Optional[str] = None
    description: Optional[str] = None


class UserWithFollowers(UserResponse):
    """User enriched with a follower count."""

    followers: int = Field(0, ge=0)


class ChannelUser(UserWithFollowers):
    """User enriched with follower and following counts."""

    following: int = Field(0, ge=0)


class ChannelViewer(CamelModel):
    """Viewer flags for a channel page."""

    has_followed: bool = False


class ChannelResponse(CamelModel):
    """Response for getChannelById."""

    user: ChannelUser
    viewer: ChannelViewer


class FollowingEntry(CamelModel):
    """One followed user as seen by the viewer."""

    following: UserWithFollowers
    viewer_has_followed: bool = False


class UserFollowingsResponse(CamelModel):
    """Response for getUserFollowings."""

    user: UserResponse
    followings: List[FollowingEntry]


# Requests


class FollowRequest(CamelModel):
    """Body of addFollow."""

    follower_id: str = Field(..., min_length=1)
    following_id: str = Field(..., min_length=1)


class UpdateUserRequest(CamelModel):
    """Body of updateUser; omitted fields keep their stored value."""

    id: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = None
    background_image: Optional[str] = None
    handle: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
