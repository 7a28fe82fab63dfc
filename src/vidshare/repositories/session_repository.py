"""
Session repository implementation.

Sessions are issued by the external identity provider; this repository
resolves an already-issued token to its user.
"""

from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import Session as DBSession
from ..models.session import SessionCreate
from .base import BaseSQLAlchemyRepository


def _as_aware(value: datetime.datetime) -> datetime.datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


class SessionRepository(BaseSQLAlchemyRepository[DBSession, SessionCreate, dict]):
    """Repository for login sessions."""

    def __init__(self) -> None:
        super().__init__(DBSession)

    async def get_by_token(
        self, session: AsyncSession, session_token: str
    ) -> Optional[DBSession]:
        """Look up a session row by its token, expired or not."""
        result = await session.execute(
            select(DBSession).where(DBSession.session_token == session_token)
        )
        return result.scalar_one_or_none()

    def is_expired(
        self, row: DBSession, now: Optional[datetime.datetime] = None
    ) -> bool:
        """Whether a session row is past its expiry."""
        reference = now or datetime.datetime.now(datetime.timezone.utc)
        return _as_aware(row.expires) <= _as_aware(reference)
