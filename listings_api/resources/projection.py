"""
Field projector - decides which listing fields go out on read and which are accepted on write.
Challenge: Read and write shapes differ (derived fields, renamed inputs, publication kept out of generic writes).
Design: One explicit table per context; the ORM model knows nothing about the wire.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from listings_api.core.errors import UnknownFieldError
from listings_api.resources.contexts import Context
from listings_api.resources.derived import (
    created_at_ago,
    normalize_description,
    short_description,
    utcnow,
)

logger = logging.getLogger(__name__)

USER_IRI_PREFIX = "/api/v1/users/"
LISTING_IRI_PREFIX = "/api/v1/listings/"


def user_iri(user: Any) -> str | None:
    if user is None:
        return None
    return f"{USER_IRI_PREFIX}{user.id}"


def listing_iri(listing: Any) -> str:
    return f"{LISTING_IRI_PREFIX}{listing.id}"


@dataclass(frozen=True)
class FieldSpec:
    """One wire field.

    Read side: value comes from ``derive(record, now)`` when set, else from the
    record attribute, optionally passed through ``render``.
    Write side: the wire value goes through ``transform`` before it is stored
    on the record attribute.
    """

    name: str
    attribute: str | None = None
    derive: Callable[[Any, datetime], Any] | None = None
    render: Callable[[Any], Any] | None = None
    transform: Callable[[Any], Any] | None = None

    def read(self, record: Any, now: datetime) -> Any:
        if self.derive is not None:
            return self.derive(record, now)
        value = getattr(record, self.attribute)
        return self.render(value) if self.render is not None else value

    def write(self, record: Any, value: Any) -> None:
        if self.transform is not None:
            value = self.transform(value)
        setattr(record, self.attribute, value)


READ_FIELDS = (
    FieldSpec("title", "title"),
    FieldSpec("description", "description"),
    FieldSpec("shortDescription", derive=lambda r, now: short_description(r.description)),
    FieldSpec("price", "price"),
    FieldSpec("createdAtAgo", derive=lambda r, now: created_at_ago(r.created_at, now)),
    FieldSpec("isPublished", "is_published"),
    FieldSpec("owner", "owner", render=user_iri),
)

# Item-only fields on top of the collection shape (none yet beyond the id)
ITEM_ONLY_FIELDS: tuple[FieldSpec, ...] = ()

WRITE_FIELDS = (
    FieldSpec("title", "title"),
    FieldSpec("description", "description", transform=normalize_description),
    FieldSpec("price", "price"),
    FieldSpec("owner", "owner"),
)

PROJECTIONS: dict[Context, tuple[FieldSpec, ...]] = {
    Context.COLLECTION_READ: READ_FIELDS,
    Context.ITEM_READ: (FieldSpec("id", "id"),) + READ_FIELDS + ITEM_ONLY_FIELDS,
    Context.CREATE: WRITE_FIELDS,
    Context.UPDATE: WRITE_FIELDS,
    # isPublished only moves through its own narrow path
    Context.PUBLICATION: (FieldSpec("isPublished", "is_published"),),
}


def fields_for(context: Context, properties: Iterable[str] | None = None) -> tuple[FieldSpec, ...]:
    """Projection table for a context, optionally narrowed to the requested wire names."""
    specs = PROJECTIONS[context]
    wanted = set(properties or ())
    if not wanted:
        return specs
    return tuple(spec for spec in specs if spec.name in wanted)


def field_names(context: Context, properties: Iterable[str] | None = None) -> list[str]:
    return [spec.name for spec in fields_for(context, properties)]


def project(
    record: Any,
    context: Context,
    now: datetime | None = None,
    properties: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Serialize a record for a read context."""
    if not context.is_read:
        raise ValueError(f"{context.value} is not a read context")
    now = now or utcnow()
    return {spec.name: spec.read(record, now) for spec in fields_for(context, properties)}


def apply(
    payload: Mapping[str, Any],
    context: Context,
    record: Any,
    strict: bool = False,
) -> Any:
    """Copy writable wire fields onto a record. Returns the same record.

    Keys outside the write projection are dropped, or rejected as a whole with
    UnknownFieldError when strict. Nothing is written when the payload is rejected.
    """
    if not context.is_write:
        raise ValueError(f"{context.value} is not a write context")
    writable = {spec.name: spec for spec in PROJECTIONS[context]}
    unknown = [key for key in payload if key not in writable]
    if unknown:
        if strict:
            raise UnknownFieldError(unknown, context.value)
        logger.debug("Dropping non-writable fields for %s: %s", context.value, unknown)
    for key, value in payload.items():
        spec = writable.get(key)
        if spec is not None:
            spec.write(record, value)
    return record
