"""
Services module for vidshare.

Contains the business logic shared by the procedures: engagement toggling,
aggregate enrichment, random selection, ownership checks and system
playlist upkeep.
"""

from __future__ import annotations

from vidshare.services.engagement_toggler import EngagementToggler, ToggleResult
from vidshare.services.enrichment import AggregateEnricher
from vidshare.services.ownership import get_owned_video
from vidshare.services.random_selection import fisher_yates_indices, pick_random
from vidshare.services.system_playlists import SystemPlaylistService

__all__: list[str] = [
    "AggregateEnricher",
    "EngagementToggler",
    "SystemPlaylistService",
    "ToggleResult",
    "fisher_yates_indices",
    "get_owned_video",
    "pick_random",
]
