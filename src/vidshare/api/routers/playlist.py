"""Playlist procedures."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from vidshare.api.deps import ensure_actor, get_context, get_protected_context
from vidshare.api.presenters import videos_with_views
from vidshare.api.routers.responses import (
    PROTECTED_ERRORS,
    PUBLIC_ITEM_ERRORS,
    PUBLIC_QUERY_ERRORS,
)
from vidshare.api.schemas.playlists import (
    AddPlaylistRequest,
    PlaylistDetailResponse,
    PlaylistResponse,
    PlaylistSummary,
    PlaylistWithVideoIds,
)
from vidshare.api.schemas.users import UserResponse, UserWithFollowers
from vidshare.container import RequestContext, container
from vidshare.exceptions import APIValidationError, NotFoundError
from vidshare.models.enums import RESERVED_PLAYLIST_TITLES
from vidshare.models.playlist import PlaylistCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/playlist", tags=["playlist"])


@router.post(
    "/addPlaylist", response_model=PlaylistResponse, responses=PROTECTED_ERRORS
)
async def add_playlist(
    body: AddPlaylistRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> PlaylistResponse:
    """
    Create a playlist for the session user.

    Raises
    ------
    APIValidationError
        If the title is one of the reserved system playlist titles.
    """
    ensure_actor(ctx, body.user_id, "userId")
    if body.title.strip() in RESERVED_PLAYLIST_TITLES:
        raise APIValidationError(
            message=f"'{body.title.strip()}' is a reserved playlist title",
            details={"field": "title"},
        )
    playlist = await container.create_playlist_repository().create(
        ctx.session,
        obj_in=PlaylistCreate(
            user_id=body.user_id, title=body.title, description=body.description
        ),
    )
    logger.info("User %s created playlist %s", body.user_id, playlist.id)
    return PlaylistResponse.model_validate(playlist)


@router.get(
    "/getSavePlaylistData",
    response_model=List[PlaylistWithVideoIds],
    responses=PROTECTED_ERRORS,
)
async def get_save_playlist_data(
    user_id: str = Query(..., alias="userId", min_length=1),
    ctx: RequestContext = Depends(get_protected_context),
) -> List[PlaylistWithVideoIds]:
    """The caller's own playlists (system playlists excluded) with member ids."""
    ensure_actor(ctx, user_id, "userId")
    playlists = await container.create_playlist_repository().find_by_user(
        ctx.session, user_id, exclude_titles=RESERVED_PLAYLIST_TITLES
    )
    membership_repo = container.create_playlist_membership_repository()
    members = await membership_repo.video_ids_by_playlist(
        ctx.session, [playlist.id for playlist in playlists]
    )
    return [
        PlaylistWithVideoIds.build(playlist, video_ids=members[playlist.id])
        for playlist in playlists
    ]


@router.get(
    "/getPlaylistsByUserId",
    response_model=List[PlaylistSummary],
    responses=PUBLIC_QUERY_ERRORS,
)
async def get_playlists_by_user_id(
    user_id: str = Query(..., alias="userId", min_length=1),
    ctx: RequestContext = Depends(get_context),
) -> List[PlaylistSummary]:
    """
    Playlist cards for a user.

    Returns
    -------
    List[PlaylistSummary]
        Each playlist with its video count and the thumbnail of the video
        added first (None for empty playlists).
    """
    playlists = await container.create_playlist_repository().find_by_user(
        ctx.session, user_id
    )
    playlist_ids = [playlist.id for playlist in playlists]
    membership_repo = container.create_playlist_membership_repository()
    counts = await membership_repo.count_by_playlist(ctx.session, playlist_ids)
    thumbnails = await membership_repo.first_thumbnails(ctx.session, playlist_ids)

    return [
        PlaylistSummary(
            playlist=PlaylistResponse.model_validate(playlist),
            video_count=counts.get(playlist.id, 0),
            thumbnail_url=thumbnails.get(playlist.id),
        )
        for playlist in playlists
    ]


@router.get(
    "/getPlaylistById",
    response_model=PlaylistDetailResponse,
    responses=PUBLIC_ITEM_ERRORS,
)
async def get_playlist_by_id(
    id: str = Query(..., min_length=1),
    ctx: RequestContext = Depends(get_context),
) -> PlaylistDetailResponse:
    """
    A playlist with its owner and videos.

    Raises
    ------
    NotFoundError
        If the playlist does not exist.
    """
    playlist = await container.create_playlist_repository().get_with_user(
        ctx.session, id
    )
    if playlist is None:
        raise NotFoundError(resource_type="Playlist", identifier=id)

    membership_repo = container.create_playlist_membership_repository()
    memberships = await membership_repo.get_playlist_videos(ctx.session, playlist.id)
    videos = [membership.video for membership in memberships]
    followers = await container.aggregate_enricher.follower_counts(
        ctx.session, [playlist.user_id]
    )

    return PlaylistDetailResponse(
        playlist=PlaylistResponse.model_validate(playlist),
        user=UserWithFollowers.build(
            playlist.user, followers=followers[playlist.user_id]
        ),
        videos=await videos_with_views(ctx.session, videos),
        authors=[UserResponse.model_validate(video.user) for video in videos],
    )
