"""
Enums for vidshare models.

Defines enumeration types used across the application for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class EngagementType(str, Enum):
    """Kinds of engagement facts."""

    LIKE = "LIKE"
    DISLIKE = "DISLIKE"
    VIEW = "VIEW"
    FOLLOW = "FOLLOW"

    @property
    def opposing(self) -> Optional["EngagementType"]:
        """The mutually exclusive counterpart, if any."""
        if self is EngagementType.LIKE:
            return EngagementType.DISLIKE
        if self is EngagementType.DISLIKE:
            return EngagementType.LIKE
        return None


class SystemPlaylist(str, Enum):
    """Reserved playlist titles maintained by the engagement procedures."""

    LIKED_VIDEOS = "Liked Videos"
    HISTORY = "History"


RESERVED_PLAYLIST_TITLES: frozenset[str] = frozenset(p.value for p in SystemPlaylist)
