# app/core/store.py
"""Document store adapter.

A thin, entity-agnostic layer over an ``AsyncSession``: services ask for
``create``/``find``/``find_one``/``update_by_id``/``aggregate`` and never
touch the session directly. Each write commits on its own; there is no
transaction spanning several calls.

Failures are translated into the error taxonomy: unique violations become
``ConflictError``, other constraint violations ``ValidationError`` and any
driver or connection failure ``StoreUnavailableError``.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConflictError, StoreUnavailableError, ValidationError
from models.base import Base

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig).lower()
    return "unique" in text or "duplicate" in text


class DocumentStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ---------- writes ----------
    async def create(self, entity: Type[T], **fields) -> T:
        record = entity(**fields)
        self.db.add(record)
        await self._commit(entity)
        await self._refresh(record)
        return record

    async def update_by_id(self, entity: Type[T], record_id: str, patch: Dict[str, Any]) -> Optional[T]:
        record = await self.get(entity, record_id)
        if record is None:
            return None
        for key, value in patch.items():
            setattr(record, key, value)
        await self._commit(entity)
        await self._refresh(record)
        return record

    async def delete_by_id(self, entity: Type[T], record_id: str) -> Optional[T]:
        record = await self.get(entity, record_id)
        if record is None:
            return None
        await self.db.delete(record)
        await self._commit(entity)
        return record

    # ---------- reads ----------
    async def get(self, entity: Type[T], record_id: str) -> Optional[T]:
        try:
            return await self.db.get(entity, record_id)
        except SQLAlchemyError as e:
            raise self._unavailable(entity, e)

    async def find_one(self, entity: Type[T], **filters) -> Optional[T]:
        rows = await self.find(entity, filters, limit=1)
        return rows[0] if rows else None

    async def find(
            self,
            entity: Type[T],
            filters: Optional[Dict[str, Any]] = None,
            order_by: Optional[Sequence] = None,
            skip: int = 0,
            limit: Optional[int] = None,
    ) -> List[T]:
        query = select(entity).where(*self._conditions(entity, filters))
        if order_by is not None:
            query = query.order_by(*order_by)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._unavailable(entity, e)
        return list(result.scalars().all())

    async def count(self, entity: Type[T], filters: Optional[Dict[str, Any]] = None) -> int:
        query = select(func.count()).select_from(entity).where(*self._conditions(entity, filters))
        try:
            return await self.db.scalar(query) or 0
        except SQLAlchemyError as e:
            raise self._unavailable(entity, e)

    async def aggregate(self, statement) -> List[Any]:
        """Run a grouped select and return its rows."""
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            raise self._unavailable(None, e)
        return list(result.all())

    # ---------- helpers ----------
    @staticmethod
    def _conditions(entity, filters: Optional[Dict[str, Any]]) -> list:
        conditions = []
        for key, value in (filters or {}).items():
            column = getattr(entity, key)
            if isinstance(value, (list, tuple, set)):
                conditions.append(column.in_(list(value)))
            else:
                conditions.append(column == value)
        return conditions

    async def _commit(self, entity) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Integrity error on {entity.__name__}: {e.orig}")
            if _is_unique_violation(e):
                raise ConflictError(f"{entity.__name__} already exists") from e
            raise ValidationError(f"Invalid {entity.__name__} data") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._unavailable(entity, e)

    async def _refresh(self, record) -> None:
        try:
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            raise self._unavailable(type(record), e)

    @staticmethod
    def _unavailable(entity, error: Exception) -> StoreUnavailableError:
        name = entity.__name__ if entity is not None else "aggregate"
        logger.error(f"Store failure on {name}: {error}")
        exc = StoreUnavailableError()
        exc.__cause__ = error
        return exc
