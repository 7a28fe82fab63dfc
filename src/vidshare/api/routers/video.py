"""Video procedures: playback detail, discovery lists and owner mutations."""

from __future__ import annotations

import logging
import random
from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidshare.api.deps import (
    ensure_actor,
    get_context,
    get_protected_context,
    get_rng,
)
from vidshare.api.presenters import comments_with_users, toggle_response, video_list
from vidshare.api.routers.responses import (
    PROTECTED_ERRORS,
    PUBLIC_ITEM_ERRORS,
    PUBLIC_QUERY_ERRORS,
    TOGGLE_ERRORS,
)
from vidshare.api.schemas.engagement import PlaylistHasVideoResponse, ToggleResponse
from vidshare.api.schemas.users import UserWithFollowers
from vidshare.api.schemas.videos import (
    AddVideoToPlaylistRequest,
    CreateVideoRequest,
    UpdateVideoRequest,
    VideoDetailResponse,
    VideoListResponse,
    VideoOwnerRequest,
    VideoResponse,
    VideoViewer,
    VideoWithCounts,
)
from vidshare.container import RequestContext, container
from vidshare.exceptions import NotFoundError
from vidshare.models.video import VideoCreate, VideoUpdate
from vidshare.services.ownership import get_owned_video
from vidshare.services.random_selection import pick_random

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/video", tags=["video"])


@router.get(
    "/getVideoById", response_model=VideoDetailResponse, responses=PUBLIC_ITEM_ERRORS
)
async def get_video_by_id(
    id: str = Query(..., min_length=1, description="Video ID"),
    viewer_id: Optional[str] = Query(
        None, alias="viewerId", description="Requesting user, for viewer flags"
    ),
    ctx: RequestContext = Depends(get_context),
) -> VideoDetailResponse:
    """
    Get a video with its author, comments and engagement.

    Parameters
    ----------
    id : str
        Video ID.
    viewer_id : Optional[str]
        Requesting user; when omitted or empty every viewer flag is false.
    ctx : RequestContext
        Request context from dependency.

    Returns
    -------
    VideoDetailResponse
        Video (+likes, dislikes, views), author (+followers), comments
        with their authors and the viewer flags.

    Raises
    ------
    NotFoundError
        If the video does not exist.
    """
    session = ctx.session
    video = await container.create_video_repository().get_with_user(session, id)
    if video is None:
        raise NotFoundError(resource_type="Video", identifier=id)

    enricher = container.aggregate_enricher
    counts = (await enricher.video_counts(session, [video.id]))[video.id]
    followers = await enricher.follower_counts(session, [video.user_id])
    flags = await enricher.video_viewer_flags(
        session, video.id, viewer_id, owner_id=video.user_id
    )
    comments = await container.create_comment_repository().find_by_video(
        session, video.id
    )

    return VideoDetailResponse(
        video=VideoWithCounts.build(
            video,
            views=counts.views,
            likes=counts.likes,
            dislikes=counts.dislikes,
        ),
        user=UserWithFollowers.build(video.user, followers=followers[video.user_id]),
        comments=comments_with_users(comments),
        viewer=VideoViewer(
            has_followed=flags.has_followed,
            has_liked=flags.has_liked,
            has_disliked=flags.has_disliked,
        ),
    )


@router.get(
    "/getRandomVideos", response_model=VideoListResponse, responses=PUBLIC_QUERY_ERRORS
)
async def get_random_videos(
    count: int = Query(..., ge=0, description="Number of videos to return"),
    ctx: RequestContext = Depends(get_context),
    rng: random.Random = Depends(get_rng),
) -> VideoListResponse:
    """
    Pick up to ``count`` distinct published videos in random order.

    Every published video is loaded and shuffled on each call.
    """
    videos = await container.create_video_repository().find_published(ctx.session)
    picked = pick_random(videos, count, rng)
    logger.debug("Picked %d of %d published videos", len(picked), len(videos))
    return await video_list(ctx.session, picked)


@router.get(
    "/getVideoBySearch", response_model=VideoListResponse, responses=PUBLIC_QUERY_ERRORS
)
async def get_video_by_search(
    query: str = Query(..., description="Substring to look for in titles"),
    ctx: RequestContext = Depends(get_context),
) -> VideoListResponse:
    """Published videos whose title contains ``query`` (at most 10)."""
    videos = await container.create_video_repository().search_published(
        ctx.session, query
    )
    return await video_list(ctx.session, videos)


@router.get(
    "/getVideosByUserId",
    response_model=VideoListResponse,
    responses=PUBLIC_QUERY_ERRORS,
)
async def get_videos_by_user_id(
    user_id: str = Query(..., alias="userId", min_length=1),
    ctx: RequestContext = Depends(get_context),
) -> VideoListResponse:
    """All published videos of a user, with views."""
    videos = await container.create_video_repository().find_published_by_user(
        ctx.session, user_id
    )
    return await video_list(ctx.session, videos)


@router.post("/createVideo", response_model=VideoResponse, responses=PROTECTED_ERRORS)
async def create_video(
    body: CreateVideoRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> VideoResponse:
    """Create an unpublished video for the session user."""
    ensure_actor(ctx, body.user_id, "userId")
    video = await container.create_video_repository().create(
        ctx.session,
        obj_in=VideoCreate(user_id=body.user_id, video_url=body.video_url),
    )
    logger.info("User %s created video %s", body.user_id, video.id)
    return VideoResponse.model_validate(video)


@router.post("/updateVideo", response_model=VideoResponse, responses=PROTECTED_ERRORS)
async def update_video(
    body: UpdateVideoRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> VideoResponse:
    """
    Update the metadata of an owned video.

    Only fields present in the request are written.

    Raises
    ------
    NotFoundError
        If the video does not exist or is owned by someone else.
    """
    ensure_actor(ctx, body.owner_id, "ownerId")
    repo = container.create_video_repository()
    video = await get_owned_video(ctx.session, body.id, body.owner_id, repo)
    changes = VideoUpdate(
        **body.model_dump(
            include={"title", "description", "thumbnail_url"}, exclude_unset=True
        )
    )
    video = await repo.update(ctx.session, db_obj=video, obj_in=changes)
    return VideoResponse.model_validate(video)


@router.post("/publishVideo", response_model=VideoResponse, responses=PROTECTED_ERRORS)
async def publish_video(
    body: VideoOwnerRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> VideoResponse:
    """Flip the publish flag of an owned video."""
    ensure_actor(ctx, body.owner_id, "ownerId")
    repo = container.create_video_repository()
    video = await get_owned_video(ctx.session, body.id, body.owner_id, repo)
    video = await repo.update(
        ctx.session, db_obj=video, obj_in=VideoUpdate(publish=not video.publish)
    )
    logger.info("Video %s publish=%s", video.id, video.publish)
    return VideoResponse.model_validate(video)


@router.post("/deleteVideo", response_model=VideoResponse, responses=PROTECTED_ERRORS)
async def delete_video(
    body: VideoOwnerRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> VideoResponse:
    """Delete an owned video with its comments, engagement and memberships."""
    ensure_actor(ctx, body.owner_id, "ownerId")
    repo = container.create_video_repository()
    video = await get_owned_video(ctx.session, body.id, body.owner_id, repo)
    deleted = VideoResponse.model_validate(video)
    await repo.delete(ctx.session, id=video.id)
    logger.info("Video %s deleted by %s", video.id, body.owner_id)
    return deleted


@router.post(
    "/addVideoToPlaylist",
    response_model=ToggleResponse[PlaylistHasVideoResponse],
    responses=TOGGLE_ERRORS,
)
async def add_video_to_playlist(
    body: AddVideoToPlaylistRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> ToggleResponse[PlaylistHasVideoResponse]:
    """
    Add a video to one of the caller's playlists, or remove it if present.

    Raises
    ------
    NotFoundError
        If the playlist is unknown or not the caller's, or the video is unknown.
    """
    session = ctx.session
    playlist = await container.create_playlist_repository().get(
        session, body.playlist_id
    )
    if playlist is None or playlist.user_id != ctx.user_id:
        raise NotFoundError(resource_type="Playlist", identifier=body.playlist_id)
    if not await container.create_video_repository().exists(session, body.video_id):
        raise NotFoundError(resource_type="Video", identifier=body.video_id)

    result = await container.engagement_toggler.toggle_playlist_video(
        session, body.playlist_id, body.video_id
    )
    return toggle_response(result, PlaylistHasVideoResponse)
