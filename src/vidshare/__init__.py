"""
vidshare - Video-sharing backend procedures.

Typed remote procedures for video playback metadata, engagement (likes,
dislikes, views, follows), comments, playlists and announcements, backed by
a relational schema through SQLAlchemy.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "vidshare"
__email__ = "noreply@vidshare.dev"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
