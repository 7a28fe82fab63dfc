"""Announcement procedures: channel posts and their reactions."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidshare.api.deps import ensure_actor, get_context, get_protected_context
from vidshare.api.presenters import toggle_response
from vidshare.api.routers.responses import (
    PROTECTED_ERRORS,
    PUBLIC_QUERY_ERRORS,
    TOGGLE_ERRORS,
)
from vidshare.api.schemas.announcements import (
    AddAnnouncementRequest,
    AnnouncementResponse,
    AnnouncementsResponse,
    AnnouncementViewer,
    AnnouncementWithEngagement,
)
from vidshare.api.schemas.engagement import (
    AnnouncementEngagementResponse,
    EngagementRequest,
    ToggleResponse,
)
from vidshare.api.schemas.users import UserResponse
from vidshare.container import RequestContext, container
from vidshare.exceptions import NotFoundError
from vidshare.models.announcement import AnnouncementCreate
from vidshare.models.enums import EngagementType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/announcement", tags=["announcement"])


# The procedure name keeps the misspelling clients already call.
@router.get(
    "/getAnnoucementsByUserId",
    response_model=AnnouncementsResponse,
    responses=PUBLIC_QUERY_ERRORS,
)
async def get_announcements_by_user_id(
    id: str = Query(..., min_length=1, description="Announcing user ID"),
    viewer_id: Optional[str] = Query(None, alias="viewerId"),
    ctx: RequestContext = Depends(get_context),
) -> AnnouncementsResponse:
    """
    A user's announcements with reaction counts and viewer flags.

    An unknown user has no announcements, so the response carries an empty
    list and a null ``user``.
    """
    user = await container.create_user_repository().get(ctx.session, id)
    if user is None:
        logger.debug("No announcements for unknown user %s", id)
        return AnnouncementsResponse(user=None, announcements=[])

    announcements = await container.create_announcement_repository().find_by_user(
        ctx.session, user.id
    )
    ids = [announcement.id for announcement in announcements]
    enricher = container.aggregate_enricher
    counts = await enricher.announcement_counts(ctx.session, ids)
    flags = await enricher.announcement_viewer_flags(ctx.session, ids, viewer_id)

    return AnnouncementsResponse(
        user=UserResponse.model_validate(user),
        announcements=[
            AnnouncementWithEngagement.build(
                announcement,
                likes=counts[announcement.id].likes,
                dislikes=counts[announcement.id].dislikes,
                viewer=AnnouncementViewer(
                    has_liked=flags[announcement.id].has_liked,
                    has_disliked=flags[announcement.id].has_disliked,
                ),
            )
            for announcement in announcements
        ],
    )


@router.post(
    "/addAnnouncement", response_model=AnnouncementResponse, responses=PROTECTED_ERRORS
)
async def add_announcement(
    body: AddAnnouncementRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> AnnouncementResponse:
    """Post an announcement as the session user."""
    ensure_actor(ctx, body.user_id, "userId")
    announcement = await container.create_announcement_repository().create(
        ctx.session,
        obj_in=AnnouncementCreate(user_id=body.user_id, message=body.message),
    )
    logger.info("User %s posted announcement %s", body.user_id, announcement.id)
    return AnnouncementResponse.model_validate(announcement)


async def _toggle(
    ctx: RequestContext, body: EngagementRequest, kind: EngagementType
) -> ToggleResponse[AnnouncementEngagementResponse]:
    ensure_actor(ctx, body.user_id, "userId")
    if not await container.create_announcement_repository().exists(
        ctx.session, body.id
    ):
        raise NotFoundError(resource_type="Announcement", identifier=body.id)
    result = await container.engagement_toggler.toggle_announcement_engagement(
        ctx.session, body.id, body.user_id, kind
    )
    return toggle_response(result, AnnouncementEngagementResponse)


@router.post(
    "/addLikeAnnouncement",
    response_model=ToggleResponse[AnnouncementEngagementResponse],
    responses=TOGGLE_ERRORS,
)
async def add_like_announcement(
    body: EngagementRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> ToggleResponse[AnnouncementEngagementResponse]:
    """Toggle a like on an announcement; an existing dislike is removed first."""
    return await _toggle(ctx, body, EngagementType.LIKE)


@router.post(
    "/addDislikeAnnouncement",
    response_model=ToggleResponse[AnnouncementEngagementResponse],
    responses=TOGGLE_ERRORS,
)
async def add_dislike_announcement(
    body: EngagementRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> ToggleResponse[AnnouncementEngagementResponse]:
    """Toggle a dislike on an announcement; an existing like is removed first."""
    return await _toggle(ctx, body, EngagementType.DISLIKE)
