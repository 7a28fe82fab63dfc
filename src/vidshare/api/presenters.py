"""Response assembly shared by several procedures."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.base import CamelModel
from vidshare.api.schemas.comments import (
    CommentAuthor,
    CommentResponse,
    CommentWithUser,
)
from vidshare.api.schemas.engagement import ToggleResponse
from vidshare.api.schemas.users import UserResponse
from vidshare.api.schemas.videos import VideoListResponse, VideoWithViews
from vidshare.container import container
from vidshare.db.models import Comment as CommentDB
from vidshare.db.models import Video as VideoDB
from vidshare.models.enums import EngagementType
from vidshare.services.engagement_toggler import ToggleResult

SchemaT = TypeVar("SchemaT", bound=CamelModel)


async def videos_with_views(
    session: AsyncSession, videos: Sequence[VideoDB]
) -> list[VideoWithViews]:
    """Attach view counts to videos, preserving their order."""
    counts = await container.aggregate_enricher.video_counts(
        session, [video.id for video in videos], kinds=(EngagementType.VIEW,)
    )
    return [
        VideoWithViews.build(video, views=counts[video.id].views) for video in videos
    ]


async def video_list(
    session: AsyncSession, videos: Sequence[VideoDB]
) -> VideoListResponse:
    """
    Build a ``{videos, users}`` response.

    The videos must have their ``user`` relationship loaded; ``users[i]``
    is the author of ``videos[i]``.
    """
    return VideoListResponse(
        videos=await videos_with_views(session, videos),
        users=[UserResponse.model_validate(video.user) for video in videos],
    )


def comments_with_users(comments: Sequence[CommentDB]) -> list[CommentWithUser]:
    """Pair each comment with its author; ``user`` must be loaded."""
    return [
        CommentWithUser(
            user=CommentAuthor.model_validate(comment.user),
            comment=CommentResponse.model_validate(comment),
        )
        for comment in comments
    ]


def toggle_response(
    result: ToggleResult, schema: type[SchemaT]
) -> ToggleResponse[SchemaT]:
    """Convert a service-level toggle result into the wire envelope."""
    engagement: Optional[SchemaT] = None
    if result.created is not None:
        engagement = schema.model_validate(result.created)
    return ToggleResponse[schema](  # type: ignore[valid-type]
        active=result.active,
        deleted_count=result.deleted_count,
        opposing_removed=result.opposing_removed,
        engagement=engagement,
    )
