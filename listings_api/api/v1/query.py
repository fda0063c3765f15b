"""
Collection query parameters - filters and property selection for GET /listings.
Bracketed names follow the usual REST convention: price[gte]=100, properties[]=title.
Values that do not parse are ignored with a warning rather than failing the request.
"""

import logging
from collections.abc import Mapping

from starlette.datastructures import QueryParams

from listings_api.db.repositories.listing_repository import ListingFilters
from listings_api.resources.validation import INTEGER_MAX, INTEGER_MIN

logger = logging.getLogger(__name__)

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}
_PRICE_OPERATORS = {
    "price[gt]": "price_gt",
    "price[gte]": "price_gte",
    "price[lt]": "price_lt",
    "price[lte]": "price_lte",
}


def _parse_bool(name: str, raw: str) -> bool | None:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    logger.warning("Ignoring filter %s=%r: not a boolean", name, raw)
    return None


def _parse_int(name: str, raw: str) -> int | None:
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring filter %s=%r: not an integer", name, raw)
        return None
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        logger.warning("Ignoring filter %s=%r: out of range", name, raw)
        return None
    return value


def parse_filters(params: Mapping[str, str]) -> ListingFilters:
    filters = ListingFilters()
    if "isPublished" in params:
        filters.is_published = _parse_bool("isPublished", params["isPublished"])
    filters.title = params.get("title") or None
    filters.description = params.get("description") or None
    for name, attribute in _PRICE_OPERATORS.items():
        if name in params:
            setattr(filters, attribute, _parse_int(name, params[name]))
    if "price[between]" in params:
        raw = params["price[between]"]
        low, sep, high = raw.partition("..")
        if not sep:
            logger.warning("Ignoring filter price[between]=%r: expected min..max", raw)
        else:
            filters.price_gte = _parse_int("price[between]", low)
            filters.price_lte = _parse_int("price[between]", high)
    return filters


def parse_properties(params: QueryParams) -> list[str]:
    """Requested wire fields; empty list means the full projection."""
    return params.getlist("properties[]") + params.getlist("properties")
