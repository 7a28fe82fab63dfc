"""User procedures: channel pages, follows, dashboard and profile edits."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError

from vidshare.api.deps import ensure_actor, get_context, get_protected_context
from vidshare.api.presenters import toggle_response
from vidshare.api.routers.responses import (
    CONFLICT_RESPONSE,
    PROTECTED_ERRORS,
    PUBLIC_ITEM_ERRORS,
    TOGGLE_ERRORS,
)
from vidshare.api.schemas.dashboard import DashboardResponse
from vidshare.api.schemas.engagement import FollowEngagementResponse, ToggleResponse
from vidshare.api.schemas.users import (
    ChannelResponse,
    ChannelUser,
    ChannelViewer,
    FollowingEntry,
    FollowRequest,
    UpdateUserRequest,
    UserFollowingsResponse,
    UserResponse,
    UserWithFollowers,
)
from vidshare.api.schemas.videos import VideoWithCounts
from vidshare.container import RequestContext, container
from vidshare.db.models import User as UserDB
from vidshare.exceptions import APIValidationError, ConflictError, NotFoundError
from vidshare.models.user import UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


async def _get_user(ctx: RequestContext, user_id: str) -> UserDB:
    user = await container.create_user_repository().get(ctx.session, user_id)
    if user is None:
        raise NotFoundError(resource_type="User", identifier=user_id)
    return user


@router.get(
    "/getChannelById", response_model=ChannelResponse, responses=PUBLIC_ITEM_ERRORS
)
async def get_channel_by_id(
    id: str = Query(..., min_length=1, description="Channel owner user ID"),
    viewer_id: Optional[str] = Query(None, alias="viewerId"),
    ctx: RequestContext = Depends(get_context),
) -> ChannelResponse:
    """
    Get a channel owner with follower and following counts.

    Parameters
    ----------
    id : str
        Channel owner user ID.
    viewer_id : Optional[str]
        Requesting user; ``viewer.hasFollowed`` is false when omitted.
    ctx : RequestContext
        Request context from dependency.

    Returns
    -------
    ChannelResponse
        The user (+followers, following) and viewer flags.
    """
    user = await _get_user(ctx, id)
    enricher = container.aggregate_enricher
    followers = await enricher.follower_counts(ctx.session, [user.id])
    following = await enricher.following_counts(ctx.session, [user.id])
    followed = await enricher.viewer_follows(ctx.session, viewer_id, [user.id])

    return ChannelResponse(
        user=ChannelUser.build(
            user, followers=followers[user.id], following=following[user.id]
        ),
        viewer=ChannelViewer(has_followed=user.id in followed),
    )


@router.post(
    "/addFollow",
    response_model=ToggleResponse[FollowEngagementResponse],
    responses=TOGGLE_ERRORS,
)
async def add_follow(
    body: FollowRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> ToggleResponse[FollowEngagementResponse]:
    """
    Follow a user, or unfollow if already following.

    Raises
    ------
    APIValidationError
        If a user tries to follow themselves.
    NotFoundError
        If the followed user does not exist.
    """
    ensure_actor(ctx, body.follower_id, "followerId")
    if body.follower_id == body.following_id:
        raise APIValidationError(
            message="Users cannot follow themselves",
            details={"field": "followingId"},
        )
    await _get_user(ctx, body.following_id)

    result = await container.engagement_toggler.toggle_follow(
        ctx.session, body.follower_id, body.following_id
    )
    return toggle_response(result, FollowEngagementResponse)


@router.get(
    "/getUserFollowings",
    response_model=UserFollowingsResponse,
    responses=PUBLIC_ITEM_ERRORS,
)
async def get_user_followings(
    id: str = Query(..., min_length=1),
    viewer_id: Optional[str] = Query(None, alias="viewerId"),
    ctx: RequestContext = Depends(get_context),
) -> UserFollowingsResponse:
    """Users followed by ``id``, each with followers and the viewer's follow flag."""
    user = await _get_user(ctx, id)
    follows = await container.create_follow_engagement_repository().get_followings(
        ctx.session, user.id
    )
    followed_ids = [follow.following_id for follow in follows]

    enricher = container.aggregate_enricher
    followers = await enricher.follower_counts(ctx.session, followed_ids)
    viewer_follows = await enricher.viewer_follows(ctx.session, viewer_id, followed_ids)

    return UserFollowingsResponse(
        user=UserResponse.model_validate(user),
        followings=[
            FollowingEntry(
                following=UserWithFollowers.build(
                    follow.following, followers=followers[follow.following_id]
                ),
                viewer_has_followed=follow.following_id in viewer_follows,
            )
            for follow in follows
        ],
    )


@router.get(
    "/getDashboardData", response_model=DashboardResponse, responses=PROTECTED_ERRORS
)
async def get_dashboard_data(
    owner_id: str = Query(..., alias="ownerId", min_length=1),
    ctx: RequestContext = Depends(get_protected_context),
) -> DashboardResponse:
    """
    Creator dashboard: every video of the owner, drafts included.

    Returns
    -------
    DashboardResponse
        Videos (+likes, dislikes, views) and totals across them, plus the
        owner's follower count.
    """
    ensure_actor(ctx, owner_id, "ownerId")
    user = await _get_user(ctx, owner_id)
    videos = await container.create_video_repository().find_by_user(
        ctx.session, user.id
    )

    enricher = container.aggregate_enricher
    counts = await enricher.video_counts(ctx.session, [video.id for video in videos])
    followers = await enricher.follower_counts(ctx.session, [user.id])

    enriched = [
        VideoWithCounts.build(
            video,
            views=counts[video.id].views,
            likes=counts[video.id].likes,
            dislikes=counts[video.id].dislikes,
        )
        for video in videos
    ]
    return DashboardResponse(
        user=UserResponse.model_validate(user),
        videos=enriched,
        total_likes=sum(video.likes for video in enriched),
        total_views=sum(video.views for video in enriched),
        total_followers=followers[user.id],
    )


@router.post(
    "/updateUser",
    response_model=UserResponse,
    responses={**PROTECTED_ERRORS, **CONFLICT_RESPONSE},
)
async def update_user(
    body: UpdateUserRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> UserResponse:
    """
    Update the session user's profile.

    Raises
    ------
    NotFoundError
        If ``id`` is not the session user.
    ConflictError
        If the new email already belongs to another account.
    """
    if body.id != ctx.user_id:
        logger.info("User %s attempted to edit profile %s", ctx.user_id, body.id)
        raise NotFoundError(resource_type="User", identifier=body.id)
    user = await _get_user(ctx, body.id)

    changes = UserUpdate(**body.model_dump(exclude={"id"}, exclude_unset=True))
    try:
        user = await container.create_user_repository().update(
            ctx.session, db_obj=user, obj_in=changes
        )
    except IntegrityError as e:
        logger.info("Profile update for %s rejected: %s", body.id, e.orig)
        raise ConflictError(
            message="Email is already in use by another account",
            details={"field": "email"},
        ) from e
    return UserResponse.model_validate(user)
