"""
Database models for vidshare.

This module contains SQLAlchemy models for users, videos, engagement facts,
comments, playlists and announcements.
"""

from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from uuid_utils import uuid7


def generate_id() -> str:
    """Generate a time-ordered string primary key."""
    return str(uuid7())


def utcnow() -> datetime.datetime:
    """Current UTC time with microsecond resolution."""
    return datetime.datetime.now(datetime.timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class User(Base):
    """Application user and channel owner."""

    __tablename__ = "users"

    # Primary key
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    # Profile
    name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    email_verified: Mapped[Optional[datetime.datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    image: Mapped[Optional[str]] = mapped_column(String(500))
    background_image: Mapped[Optional[str]] = mapped_column(String(500))
    handle: Mapped[Optional[str]] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    videos: Mapped[list["Video"]] = relationship("Video", back_populates="user")
    playlists: Mapped[list["Playlist"]] = relationship(
        "Playlist", back_populates="user"
    )
    comments: Mapped[list["Comment"]] = relationship("Comment", back_populates="user")
    announcements: Mapped[list["Announcement"]] = relationship(
        "Announcement", back_populates="user"
    )


class Session(Base):
    """Login session issued by the external identity provider."""

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    session_token: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expires: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )


class Video(Base):
    """Uploaded video; drafts stay unpublished until the owner publishes."""

    __tablename__ = "videos"

    # Primary key
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    # Foreign key
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )

    # Video metadata
    title: Mapped[Optional[str]] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(500))
    video_url: Mapped[Optional[str]] = mapped_column(String(500))

    # Status tracking
    publish: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="videos")
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="video", cascade="all, delete-orphan"
    )
    engagements: Mapped[list["VideoEngagement"]] = relationship(
        "VideoEngagement", back_populates="video", cascade="all, delete-orphan"
    )
    playlists: Mapped[list["PlaylistHasVideo"]] = relationship(
        "PlaylistHasVideo", back_populates="video", cascade="all, delete-orphan"
    )


class VideoEngagement(Base):
    """LIKE, DISLIKE or VIEW fact for a video."""

    __tablename__ = "video_engagements"
    __table_args__ = (
        # At most one LIKE and one DISLIKE per (video, user); views repeat
        Index(
            "uq_video_engagements_reaction",
            "video_id",
            "user_id",
            "engagement_type",
            unique=True,
            postgresql_where=text("engagement_type <> 'VIEW'"),
            sqlite_where=text("engagement_type <> 'VIEW'"),
        ),
        Index("ix_video_engagements_video_type", "video_id", "engagement_type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    video_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE")
    )  # NULL for anonymous views
    engagement_type: Mapped[str] = mapped_column(
        String(10), nullable=False
    )  # EngagementType enum value
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    video: Mapped["Video"] = relationship("Video", back_populates="engagements")


class FollowEngagement(Base):
    """Directed follow fact between two users."""

    __tablename__ = "follow_engagements"
    __table_args__ = (
        UniqueConstraint(
            "follower_id", "following_id", name="uq_follow_engagements_pair"
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    follower_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    following_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    engagement_type: Mapped[str] = mapped_column(
        String(10), nullable=False, default="FOLLOW"
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    follower: Mapped["User"] = relationship("User", foreign_keys=[follower_id])
    following: Mapped["User"] = relationship("User", foreign_keys=[following_id])


class Comment(Base):
    """Free-text comment on a video."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    video_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("videos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    video: Mapped["Video"] = relationship("Video", back_populates="comments")
    user: Mapped["User"] = relationship("User", back_populates="comments")


class Playlist(Base):
    """User playlist, including the reserved system playlists."""

    __tablename__ = "playlists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(50))
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="playlists")
    videos: Mapped[list["PlaylistHasVideo"]] = relationship(
        "PlaylistHasVideo", back_populates="playlist", cascade="all, delete-orphan"
    )


class PlaylistHasVideo(Base):
    """Playlist membership join row."""

    __tablename__ = "playlist_has_videos"

    # Composite primary key
    playlist_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True
    )
    video_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    playlist: Mapped["Playlist"] = relationship("Playlist", back_populates="videos")
    video: Mapped["Video"] = relationship("Video", back_populates="playlists")


class Announcement(Base):
    """Channel announcement posted by a user."""

    __tablename__ = "announcements"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="announcements")
    engagements: Mapped[list["AnnouncementEngagement"]] = relationship(
        "AnnouncementEngagement",
        back_populates="announcement",
        cascade="all, delete-orphan",
    )


class AnnouncementEngagement(Base):
    """LIKE or DISLIKE fact for an announcement."""

    __tablename__ = "announcement_engagements"
    __table_args__ = (
        UniqueConstraint(
            "announcement_id",
            "user_id",
            "engagement_type",
            name="uq_announcement_engagements_reaction",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    announcement_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("announcements.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    engagement_type: Mapped[str] = mapped_column(
        String(10), nullable=False
    )  # EngagementType enum value
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Relationships
    announcement: Mapped["Announcement"] = relationship(
        "Announcement", back_populates="engagements"
    )
