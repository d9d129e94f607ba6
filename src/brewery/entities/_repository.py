"""Async data-access base shared by the entity repositories."""

import uuid
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import ClassVar, Generic, TypeVar

from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.brewery.entities._base import EntityTable

T = TypeVar("T", bound=EntityTable)


class EntityRepository(Generic[T]):
    """Data-access layer over one table.

    Every write commits on its own, so each call is atomic at the store and
    multi-call flows are not.
    """

    model: ClassVar[type[EntityTable]]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, entity_id: str) -> T | None:
        return await self._session.get(self.model, entity_id)

    async def find_all(self) -> AsyncIterator[T]:
        result = await self._session.exec(select(self.model))
        for row in result:
            yield row

    async def save(self, entity: T) -> T:
        """Insert or replace ``entity``, keyed by its id.

        A missing id is generated here. ``created_at`` is kept from the stored
        row when the caller does not supply it; ``updated_at`` is always reset.
        """
        now = datetime.now(UTC)
        if entity.id is None:
            entity.id = str(uuid.uuid4())
        elif entity.created_at is None:
            existing = await self._session.get(self.model, entity.id)
            if existing is not None:
                entity.created_at = existing.created_at

        if entity.created_at is None:
            entity.created_at = now
        entity.updated_at = now

        merged = await self._session.merge(entity)
        await self._session.commit()
        await self._session.refresh(merged)
        logger.debug("Saved {} {}", self.model.__tablename__, merged.id)
        return merged

    async def delete_by_id(self, entity_id: str) -> None:
        """Delete the row if present; deleting an unknown id is not an error."""
        row = await self._session.get(self.model, entity_id)
        if row is None:
            logger.debug("No {} {} to delete", self.model.__tablename__, entity_id)
            return
        await self._session.delete(row)
        await self._session.commit()
        logger.debug("Deleted {} {}", self.model.__tablename__, entity_id)
