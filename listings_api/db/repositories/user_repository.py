"""
User repository - owner lookups used when resolving listing owner references.
"""

from sqlalchemy import select

from listings_api.db.models.user import User
from listings_api.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used to reject duplicate registrations."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def add(self, entity: User) -> User:
        """Persist and reload server-side defaults (created_at)."""
        entity = await super().add(entity)
        await self.session.refresh(entity)
        return entity
