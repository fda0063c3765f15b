"""
Listing service tests - validate-before-write and the unknown-field policy, below the HTTP layer.
"""

import pytest
from sqlalchemy import Text
from sqlalchemy.ext.asyncio import AsyncSession

from listings_api.core.errors import NotFound, UnknownFieldError, ValidationFailure
from listings_api.db.models import Listing
from listings_api.db.repositories import ListingFilters, ListingRepository, UserRepository
from listings_api.services.listing_service import ListingService
from listings_api.services.owner_resolver import OwnerResolver, parse_user_reference
from listings_api.resources.validation import UnresolvedReference


def _service(session: AsyncSession, strict: bool = False) -> ListingService:
    return ListingService(
        ListingRepository(session),
        OwnerResolver(UserRepository(session)),
        strict_write_fields=strict,
    )


@pytest.mark.parametrize(
    "raw, expected",
    [(3, 3), ("3", 3), ("/api/v1/users/3", 3), (" 12 ", 12), ("/api/v1/listings/3", None), (True, None), ({"id": 3}, None)],
)
def test_parse_user_reference(raw, expected):
    assert parse_user_reference(raw) == expected


@pytest.mark.asyncio
async def test_resolver_returns_unresolved_reference(session: AsyncSession, owner):
    resolver = OwnerResolver(UserRepository(session))
    assert await resolver.resolve(owner.id) is owner
    assert await resolver.resolve("/api/v1/users/999") == UnresolvedReference("/api/v1/users/999")
    assert await resolver.resolve("someone") == UnresolvedReference("someone")
    assert await resolver.resolve(None) is None


@pytest.mark.asyncio
async def test_resolver_does_not_query_ids_beyond_integer_range(session: AsyncSession, owner):
    resolver = OwnerResolver(UserRepository(session))
    huge = f"/api/v1/users/{10**25}"
    assert await resolver.resolve(huge) == UnresolvedReference(huge)
    assert await resolver.resolve(2**31) == UnresolvedReference(2**31)


@pytest.mark.asyncio
async def test_strict_mode_rejects_unknown_fields_and_persists_nothing(session: AsyncSession, owner):
    svc = _service(session, strict=True)
    with pytest.raises(UnknownFieldError) as exc_info:
        await svc.create({"title": "Brie Lovers", "price": 1000, "owner": owner.id, "isPublished": True})
    assert exc_info.value.fields == ["isPublished"]
    _, total = await svc.list_page(ListingFilters(), page=1, page_size=3)
    assert total == 0


@pytest.mark.asyncio
async def test_lenient_mode_drops_unknown_fields(session: AsyncSession, owner):
    svc = _service(session)
    listing = await svc.create({"title": "Brie Lovers", "price": 1000, "owner": owner.id, "isPublished": True})
    assert listing.id is not None
    assert listing.is_published is False


@pytest.mark.asyncio
async def test_rejected_update_leaves_listing_untouched(session: AsyncSession, owner):
    svc = _service(session)
    listing = await svc.create({"title": "Brie Lovers", "price": 1000, "owner": owner.id})
    with pytest.raises(ValidationFailure) as exc_info:
        await svc.update(listing.id, {"title": "", "description": "new\ntext"})
    assert [v.field for v in exc_info.value.violations] == ["title"]
    assert listing.title == "Brie Lovers"
    assert listing.description is None


@pytest.mark.asyncio
async def test_publish_and_missing_listing(session: AsyncSession, owner):
    svc = _service(session)
    listing = await svc.create({"title": "Brie Lovers", "price": 1000, "owner": owner.id})
    published = await svc.set_published(listing.id, True)
    assert published.is_published is True
    with pytest.raises(NotFound):
        await svc.get(listing.id + 1)


def test_listing_title_column_is_unbounded():
    title = Listing.__table__.c.title
    assert isinstance(title.type, Text)
    assert title.type.length is None
    assert not title.index
