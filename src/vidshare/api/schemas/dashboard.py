"""Creator dashboard schemas."""

from __future__ import annotations

from typing import List

from pydantic import Field

from vidshare.api.schemas.base import CamelModel
from vidshare.api.schemas.users import UserResponse
from vidshare.api.schemas.videos import VideoWithCounts


class DashboardResponse(CamelModel):
    """Response for getDashboardData: every video of the owner, drafts included."""

    user: UserResponse
    videos: List[VideoWithCounts]
    total_likes: int = Field(0, ge=0)
    total_views: int = Field(0, ge=0)
    total_followers: int = Field(0, ge=0)
