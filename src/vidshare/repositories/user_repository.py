"""
User repository implementation.

Provides data access layer for users (channel owners and viewers). Lookups
by id, existence checks and profile updates come from the base repository.
"""

from __future__ import annotations

from ..db.models import User as DBUser
from ..models.user import UserCreate, UserUpdate
from .base import BaseSQLAlchemyRepository


class UserRepository(BaseSQLAlchemyRepository[DBUser, UserCreate, UserUpdate]):
    """Repository for user entities."""

    def __init__(self) -> None:
        super().__init__(DBUser)
