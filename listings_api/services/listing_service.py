"""
Listing service - use cases for the listing resource (create, read, list, update, publish).
Challenge: Validate before anything touches the stored record; keep endpoints thin.
Design: Writes go payload -> draft -> validation -> record; reads go record -> projection.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from listings_api.core.errors import NotFound, ValidationFailure
from listings_api.db.models.listing import Listing
from listings_api.db.repositories.listing_repository import ListingFilters, ListingRepository
from listings_api.resources import projection
from listings_api.resources.contexts import Context
from listings_api.resources.derived import utcnow
from listings_api.resources.draft import ListingDraft
from listings_api.resources.validation import validate
from listings_api.services.owner_resolver import OwnerResolver

logger = logging.getLogger(__name__)


class ListingService:
    """Handles all listing use cases on top of the repositories and the projection/validation tables."""

    def __init__(
        self,
        listing_repo: ListingRepository,
        owner_resolver: OwnerResolver,
        strict_write_fields: bool = False,
    ):
        self.listing_repo = listing_repo
        self.owner_resolver = owner_resolver
        self.strict_write_fields = strict_write_fields

    async def _resolve_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Copy of the payload with the owner reference swapped for the resolved user."""
        resolved = dict(payload)
        if "owner" in resolved:
            resolved["owner"] = await self.owner_resolver.resolve(resolved["owner"])
        return resolved

    def _checked(self, payload: dict[str, Any], context: Context, draft: ListingDraft) -> None:
        projection.apply(payload, context, draft, strict=self.strict_write_fields)
        violations = validate(draft, context)
        if violations:
            logger.info(
                "Rejected %s: %s",
                context.value,
                [(v.field, v.message) for v in violations],
            )
            raise ValidationFailure(violations)

    async def _load(self, id: int) -> Listing:
        listing = await self.listing_repo.get_by_id_with_owner(id)
        if listing is None:
            raise NotFound("Listing", id)
        return listing

    async def create(self, payload: Mapping[str, Any]) -> Listing:
        """Validate against creation rules, then build and persist the listing."""
        resolved = await self._resolve_payload(payload)
        self._checked(resolved, Context.CREATE, ListingDraft())
        listing = Listing()
        projection.apply(resolved, Context.CREATE, listing)
        await self.listing_repo.add(listing)
        logger.info("Created listing id=%s owner_id=%s", listing.id, listing.owner.id)
        return await self._load(listing.id)

    async def get(self, id: int) -> Listing:
        return await self._load(id)

    async def list_page(
        self,
        filters: ListingFilters,
        page: int,
        page_size: int,
    ) -> tuple[list[Listing], int]:
        return await self.listing_repo.get_page(filters, page=page, page_size=page_size)

    async def update(self, id: int, payload: Mapping[str, Any]) -> Listing:
        """Validate the merged state against update rules, then apply in place."""
        listing = await self._load(id)
        resolved = await self._resolve_payload(payload)
        self._checked(resolved, Context.UPDATE, ListingDraft.from_listing(listing))
        projection.apply(resolved, Context.UPDATE, listing)
        await self.listing_repo.flush()
        logger.info("Updated listing id=%s fields=%s", id, sorted(payload))
        return listing

    async def set_published(self, id: int, is_published: bool) -> Listing:
        """Narrow path for publication state; the generic write path never touches it."""
        listing = await self._load(id)
        payload = {"isPublished": is_published}
        self._checked(payload, Context.PUBLICATION, ListingDraft.from_listing(listing))
        projection.apply(payload, Context.PUBLICATION, listing)
        await self.listing_repo.flush()
        logger.info("Listing id=%s isPublished=%s", id, is_published)
        return listing


def present(
    listing: Listing,
    context: Context,
    now: datetime | None = None,
    properties: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Read projection of a listing plus its IRI."""
    body = {"@id": projection.listing_iri(listing)}
    body.update(projection.project(listing, context, now=now or utcnow(), properties=properties))
    return body
