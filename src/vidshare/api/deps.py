"""FastAPI dependencies for API endpoints."""

from __future__ import annotations

import logging
import random
from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.database import DatabaseManager
from vidshare.config.settings import Settings
from vidshare.container import RequestContext, container
from vidshare.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Session token")


def get_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_db_manager(request: Request) -> DatabaseManager:
    """Database manager the application was built with."""
    return request.app.state.db_manager


def get_rng() -> random.Random:
    """Fresh unseeded random source for each request."""
    return random.Random()


async def get_db(
    db_manager: DatabaseManager = Depends(get_db_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database session.

    Yields an async SQLAlchemy session that commits on success and rolls
    back on exception, so each procedure runs in one transaction. The
    session is closed as soon as the request fails.

    Yields
    ------
    AsyncSession
        An async SQLAlchemy session for database operations.
    """
    async with aclosing(db_manager.get_session()) as sessions:
        async for session in sessions:
            yield session


def _extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    settings: Settings,
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


async def get_context(
    session: AsyncSession = Depends(get_db),
) -> RequestContext:
    """Context for public procedures; no session user is resolved."""
    return RequestContext(session=session)


async def get_protected_context(
    request: Request,
    session: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> RequestContext:
    """
    Context for protected procedures.

    The caller is identified by ``Authorization: Bearer <token>`` or by the
    session cookie. The token must match a stored session that has not
    expired.

    Raises
    ------
    AuthenticationError
        401 if no token is presented or it does not resolve to a live session.
    """
    token = _extract_token(request, credentials, settings)
    if token is None:
        raise AuthenticationError("Authentication required")

    repo = container.create_session_repository()
    row = await repo.get_by_token(session, token)
    if row is None:
        logger.info("Rejected unknown session token")
        raise AuthenticationError("Invalid session token")
    if repo.is_expired(row):
        logger.info("Rejected expired session for user %s", row.user_id)
        raise AuthenticationError("Session expired", expired=True)

    return RequestContext(session=session, user_id=row.user_id)


def ensure_actor(ctx: RequestContext, acting_user_id: str, field: str) -> None:
    """
    Check that the acting user named in a request is the session user.

    Parameters
    ----------
    ctx : RequestContext
        Protected request context.
    acting_user_id : str
        Id given in the request body (``userId``, ``followerId``, ``ownerId``).
    field : str
        Wire name of that field, for the error detail.

    Raises
    ------
    AuthorizationError
        403 if the ids differ.
    """
    if ctx.user_id != acting_user_id:
        logger.info(
            "Actor mismatch on %s: session user %s, requested %s",
            field,
            ctx.user_id,
            acting_user_id,
        )
        raise AuthorizationError(
            message=f"{field} does not match the session user",
            details={"field": field},
        )
