"""Video engagement procedures: likes, dislikes and view counting.

Likes keep the user's "Liked Videos" playlist in step and views add the
video to the viewer's "History" playlist.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from vidshare.api.deps import ensure_actor, get_context, get_protected_context
from vidshare.api.presenters import toggle_response
from vidshare.api.routers.responses import PUBLIC_ITEM_ERRORS, TOGGLE_ERRORS
from vidshare.api.schemas.engagement import (
    EngagementRequest,
    ToggleResponse,
    VideoEngagementResponse,
    ViewCountRequest,
)
from vidshare.container import RequestContext, container
from vidshare.exceptions import NotFoundError
from vidshare.models.engagement import VideoEngagementCreate
from vidshare.models.enums import EngagementType, SystemPlaylist

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videoEngagement", tags=["videoEngagement"])


async def _require_video(ctx: RequestContext, video_id: str) -> None:
    if not await container.create_video_repository().exists(ctx.session, video_id):
        raise NotFoundError(resource_type="Video", identifier=video_id)


@router.post(
    "/addLike",
    response_model=ToggleResponse[VideoEngagementResponse],
    responses=TOGGLE_ERRORS,
)
async def add_like(
    body: EngagementRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> ToggleResponse[VideoEngagementResponse]:
    """
    Toggle a like; an existing dislike is removed first.

    The video joins "Liked Videos" when the like becomes active and leaves
    it when the like is cleared.
    """
    ensure_actor(ctx, body.user_id, "userId")
    await _require_video(ctx, body.id)

    result = await container.engagement_toggler.toggle_video_engagement(
        ctx.session, body.id, body.user_id, EngagementType.LIKE
    )
    await container.system_playlists.sync_video(
        ctx.session,
        body.user_id,
        SystemPlaylist.LIKED_VIDEOS,
        body.id,
        present=result.active,
    )
    return toggle_response(result, VideoEngagementResponse)


@router.post(
    "/addDislike",
    response_model=ToggleResponse[VideoEngagementResponse],
    responses=TOGGLE_ERRORS,
)
async def add_dislike(
    body: EngagementRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> ToggleResponse[VideoEngagementResponse]:
    """Toggle a dislike; any like is removed, along with its "Liked Videos" entry."""
    ensure_actor(ctx, body.user_id, "userId")
    await _require_video(ctx, body.id)

    result = await container.engagement_toggler.toggle_video_engagement(
        ctx.session, body.id, body.user_id, EngagementType.DISLIKE
    )
    await container.system_playlists.sync_video(
        ctx.session,
        body.user_id,
        SystemPlaylist.LIKED_VIDEOS,
        body.id,
        present=False,
    )
    return toggle_response(result, VideoEngagementResponse)


@router.post(
    "/addViewCount",
    response_model=VideoEngagementResponse,
    responses=PUBLIC_ITEM_ERRORS,
)
async def add_view_count(
    body: ViewCountRequest,
    ctx: RequestContext = Depends(get_context),
) -> VideoEngagementResponse:
    """
    Record one view of a video.

    Views always append a new fact. With a ``userId`` the video is also
    added to that user's "History" playlist when not already there.

    Raises
    ------
    NotFoundError
        If the video or the given user does not exist.
    """
    await _require_video(ctx, body.id)
    user_id = body.user_id or None
    if user_id is not None and not await container.create_user_repository().exists(
        ctx.session, user_id
    ):
        raise NotFoundError(resource_type="User", identifier=user_id)

    view = await container.create_video_engagement_repository().create(
        ctx.session,
        obj_in=VideoEngagementCreate(
            video_id=body.id, user_id=user_id, engagement_type=EngagementType.VIEW
        ),
    )
    if user_id is not None:
        await container.system_playlists.sync_video(
            ctx.session, user_id, SystemPlaylist.HISTORY, body.id, present=True
        )
    logger.debug("View recorded for video %s (user=%s)", body.id, user_id)
    return VideoEngagementResponse.model_validate(view)
