"""
Shared CRUD for vidshare tables.

Every table except the membership and engagement rows is keyed by a
single UUIDv7 ``id`` column, so ``get`` and ``exists`` go straight
through ``AsyncSession.get``. Repositories never commit; the request
scoped session in ``vidshare.api.deps`` owns the transaction.
"""

from __future__ import annotations

from typing import Any, Generic, List, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase

from vidshare.exceptions import RepositoryError

ModelType = TypeVar("ModelType", bound=DeclarativeBase)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")


def _as_columns(payload: Any, *, partial: bool) -> Mapping[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=partial)
    if isinstance(payload, Mapping):
        return payload
    return vars(payload)


class BaseSQLAlchemyRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Generic repository bound to one ORM model class."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def _flush(self, session: AsyncSession, operation: str) -> None:
        # IntegrityError passes through untouched; callers map it to a conflict
        try:
            await session.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Could not {operation} {self.model.__name__}",
                operation=operation,
                entity_type=self.model.__name__,
                original_error=e,
            ) from e

    async def _persist(
        self, session: AsyncSession, row: ModelType, operation: str
    ) -> ModelType:
        session.add(row)
        await self._flush(session, operation)
        await session.refresh(row)
        return row

    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType
    ) -> ModelType:
        """Insert a row built from a Create model (or a plain mapping)."""
        return await self._persist(
            session, self.model(**_as_columns(obj_in, partial=False)), "insert"
        )

    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        return await session.get(self.model, id)

    async def exists(self, session: AsyncSession, id: Any) -> bool:
        return await self.get(session, id) is not None

    async def get_multi(
        self, session: AsyncSession, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        rows = await session.scalars(select(self.model).offset(skip).limit(limit))
        return list(rows)

    async def count(self, session: AsyncSession) -> int:
        total = await session.scalar(select(func.count()).select_from(self.model))
        return total or 0

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
    ) -> ModelType:
        """Apply a partial update.

        Pydantic inputs contribute only the fields the caller set, so an
        omitted ``description`` stays untouched while an explicit ``None``
        clears it. Unknown keys are ignored.
        """
        for column, value in _as_columns(obj_in, partial=True).items():
            if hasattr(db_obj, column):
                setattr(db_obj, column, value)
        return await self._persist(session, db_obj, "update")

    async def delete(self, session: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """Remove the row with ``id``; returns it, or None when absent."""
        row = await self.get(session, id)
        if row is not None:
            await session.delete(row)
            await self._flush(session, "delete")
        return row
