"""
Listing repository - listing reads, filtered pages and persistence.
Challenge: Filters and pagination in one query; owner eager-loaded to avoid N+1 and async lazy loads.
"""

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from listings_api.db.models.listing import Listing
from listings_api.db.repositories.base_repository import BaseRepository


@dataclass
class ListingFilters:
    """Collection filters: exact isPublished, partial title/description, price range (cents)."""

    is_published: bool | None = None
    title: str | None = None
    description: str | None = None
    price_gt: int | None = None
    price_gte: int | None = None
    price_lt: int | None = None
    price_lte: int | None = None

    def conditions(self) -> list:
        conds = []
        if self.is_published is not None:
            conds.append(Listing.is_published == self.is_published)
        if self.title:
            conds.append(Listing.title.ilike(f"%{self.title}%"))
        if self.description:
            conds.append(Listing.description.ilike(f"%{self.description}%"))
        if self.price_gt is not None:
            conds.append(Listing.price > self.price_gt)
        if self.price_gte is not None:
            conds.append(Listing.price >= self.price_gte)
        if self.price_lt is not None:
            conds.append(Listing.price < self.price_lt)
        if self.price_lte is not None:
            conds.append(Listing.price <= self.price_lte)
        return conds


class ListingRepository(BaseRepository[Listing]):
    """Listing-specific queries. Uses selectinload so owner is always loaded."""

    def __init__(self, session):
        super().__init__(session, Listing)

    async def get_by_id_with_owner(self, id: int) -> Listing | None:
        """Fetch listing with owner in one round trip. populate_existing refreshes identity-mapped rows."""
        result = await self.session.execute(
            select(Listing)
            .where(Listing.id == id)
            .options(selectinload(Listing.owner))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_page(
        self,
        filters: ListingFilters,
        page: int = 1,
        page_size: int = 3,
    ) -> tuple[list[Listing], int]:
        """One page of filtered listings (1-based page) plus the total match count."""
        conds = filters.conditions()
        total = await self.session.scalar(
            select(func.count()).select_from(Listing).where(*conds)
        )
        result = await self.session.execute(
            select(Listing)
            .where(*conds)
            .options(selectinload(Listing.owner))
            .order_by(Listing.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0
