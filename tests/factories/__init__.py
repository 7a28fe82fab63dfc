"""
Test factories for vidshare.

ORM factories build rows with ids assigned up front; add them to a session
to persist.
"""

from tests.factories.playlist_factory import (
    AnnouncementEngagementFactory,
    AnnouncementFactory,
    FollowFactory,
    PlaylistFactory,
    PlaylistHasVideoFactory,
)
from tests.factories.user_factory import (
    SessionFactory,
    UserCreateFactory,
    UserFactory,
    UserUpdateFactory,
)
from tests.factories.video_factory import (
    CommentFactory,
    VideoCreateFactory,
    VideoEngagementFactory,
    VideoFactory,
)

__all__ = [
    "AnnouncementEngagementFactory",
    "AnnouncementFactory",
    "CommentFactory",
    "FollowFactory",
    "PlaylistFactory",
    "PlaylistHasVideoFactory",
    "SessionFactory",
    "UserCreateFactory",
    "UserFactory",
    "UserUpdateFactory",
    "VideoCreateFactory",
    "VideoEngagementFactory",
    "VideoFactory",
]
