"""
Base repository - generic async data access shared by users and listings.
Challenge: Consistent data access, testability via fixtures, query logic in one place.
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from listings_api.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        """Fetch single entity by primary key."""
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity and get its generated id. Caller's session commits."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def flush(self) -> None:
        """Push in-place changes of loaded entities to the database."""
        await self.session.flush()
