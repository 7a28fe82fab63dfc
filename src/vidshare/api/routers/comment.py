"""Comment procedures."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from vidshare.api.deps import ensure_actor, get_protected_context
from vidshare.api.presenters import comments_with_users
from vidshare.api.routers.responses import PROTECTED_ERRORS
from vidshare.api.schemas.comments import AddCommentRequest, CommentWithUser
from vidshare.container import RequestContext, container
from vidshare.exceptions import NotFoundError
from vidshare.models.comment import CommentCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comment", tags=["comment"])


@router.post(
    "/addComment", response_model=List[CommentWithUser], responses=PROTECTED_ERRORS
)
async def add_comment(
    body: AddCommentRequest,
    ctx: RequestContext = Depends(get_protected_context),
) -> List[CommentWithUser]:
    """
    Post a comment and return the video's full comment list.

    Parameters
    ----------
    body : AddCommentRequest
        Video, acting user and a 5-200 character message.
    ctx : RequestContext
        Protected request context.

    Returns
    -------
    List[CommentWithUser]
        Every comment on the video, oldest first, each with its author.

    Raises
    ------
    NotFoundError
        If the video does not exist.
    """
    ensure_actor(ctx, body.user_id, "userId")
    if not await container.create_video_repository().exists(ctx.session, body.video_id):
        raise NotFoundError(resource_type="Video", identifier=body.video_id)

    repo = container.create_comment_repository()
    await repo.create(
        ctx.session,
        obj_in=CommentCreate(
            video_id=body.video_id, user_id=body.user_id, message=body.message
        ),
    )
    logger.info("User %s commented on video %s", body.user_id, body.video_id)
    return comments_with_users(await repo.find_by_video(ctx.session, body.video_id))
