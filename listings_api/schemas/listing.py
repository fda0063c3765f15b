"""Listing request/response schemas - REST API contract.

Listing bodies are projected dicts (see resources/projection.py); these models
cover the parts with a fixed shape.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool

T = TypeVar("T")


class PublicationUpdate(BaseModel):
    """Body of PUT /listings/{id}/publication."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    is_published: StrictBool = Field(..., alias="isPublished")


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated collection wrapper."""

    data: list[T]
    total: int
    page: int
    limit: int
    total_pages: int


ListingPage = PaginatedResponse[dict[str, Any]]
