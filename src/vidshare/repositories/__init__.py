"""
Data access for the vidshare tables, one repository per model.
"""

from .announcement_engagement_repository import AnnouncementEngagementRepository
from .announcement_repository import AnnouncementRepository
from .base import BaseSQLAlchemyRepository
from .comment_repository import CommentRepository
from .follow_engagement_repository import FollowEngagementRepository
from .playlist_membership_repository import PlaylistMembershipRepository
from .playlist_repository import PlaylistRepository
from .session_repository import SessionRepository
from .user_repository import UserRepository
from .video_engagement_repository import VideoEngagementRepository
from .video_repository import VideoRepository

__all__ = [
    "BaseSQLAlchemyRepository",
    "AnnouncementEngagementRepository",
    "AnnouncementRepository",
    "CommentRepository",
    "FollowEngagementRepository",
    "PlaylistMembershipRepository",
    "PlaylistRepository",
    "SessionRepository",
    "UserRepository",
    "VideoEngagementRepository",
    "VideoRepository",
]
