"""
Listing endpoints - RESTful resource (GET collection, POST, GET item, PUT, PUT publication).
Challenge: Different field sets per operation, pagination, filters, JSON or CSV.
Design: Thin controller; the service validates and persists, the projector shapes output.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Query, Request, status

from listings_api.api.v1.negotiation import csv_response, wants_csv
from listings_api.api.v1.query import parse_filters, parse_properties
from listings_api.config import get_settings
from listings_api.db.repositories.listing_repository import ListingRepository
from listings_api.db.repositories.user_repository import UserRepository
from listings_api.db.session import DbSession
from listings_api.resources import projection
from listings_api.resources.contexts import Context
from listings_api.resources.derived import utcnow
from listings_api.resources.validation import INTEGER_MAX
from listings_api.schemas.listing import ListingPage, PublicationUpdate
from listings_api.services.listing_service import ListingService, present
from listings_api.services.owner_resolver import OwnerResolver

router = APIRouter()
settings = get_settings()

ListingId = Annotated[int, Path(ge=1, le=INTEGER_MAX)]


def _get_listing_service(session: DbSession) -> ListingService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return ListingService(
        ListingRepository(session),
        OwnerResolver(UserRepository(session)),
        strict_write_fields=settings.strict_write_fields,
    )


@router.get("", response_model=ListingPage)
async def list_listings(
    request: Request,
    session: DbSession,
    page: int = Query(1, ge=1, le=INTEGER_MAX),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """Paginated, filterable collection. REST: GET /listings?page=2&isPublished=true&price[lte]=1000."""
    svc = _get_listing_service(session)
    listings, total = await svc.list_page(parse_filters(request.query_params), page, limit)
    properties = parse_properties(request.query_params)
    now = utcnow()
    if wants_csv(request):
        return csv_response(
            projection.field_names(Context.COLLECTION_READ, properties),
            [projection.project(listing, Context.COLLECTION_READ, now, properties) for listing in listings],
        )
    return ListingPage(
        data=[present(listing, Context.COLLECTION_READ, now, properties) for listing in listings],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{listing_id}")
async def get_listing(request: Request, session: DbSession, listing_id: ListingId):
    """Single listing with the item projection."""
    svc = _get_listing_service(session)
    listing = await svc.get(listing_id)
    properties = parse_properties(request.query_params)
    if wants_csv(request):
        return csv_response(
            projection.field_names(Context.ITEM_READ, properties),
            [projection.project(listing, Context.ITEM_READ, properties=properties)],
        )
    return present(listing, Context.ITEM_READ, properties=properties)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_listing(session: DbSession, payload: dict[str, Any] = Body(...)):
    """Create listing. Creation rules apply (title 5-30 chars)."""
    svc = _get_listing_service(session)
    listing = await svc.create(payload)
    return present(listing, Context.ITEM_READ)


@router.put("/{listing_id}")
async def update_listing(session: DbSession, listing_id: ListingId, payload: dict[str, Any] = Body(...)):
    """Update listing. isPublished in the body is ignored here; see /publication."""
    svc = _get_listing_service(session)
    listing = await svc.update(listing_id, payload)
    return present(listing, Context.ITEM_READ)


@router.put("/{listing_id}/publication")
async def update_publication(session: DbSession, listing_id: ListingId, data: PublicationUpdate):
    """Publish or unpublish a listing."""
    svc = _get_listing_service(session)
    listing = await svc.set_published(listing_id, data.is_published)
    return present(listing, Context.ITEM_READ)
