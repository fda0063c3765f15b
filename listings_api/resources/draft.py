"""
Listing draft - detached copy of a listing's writable state.
Writes land on a draft first; only a draft that validates is applied to the stored listing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ListingDraft:
    title: Any = None
    description: Any = None
    price: Any = None
    owner: Any = None
    is_published: Any = False

    @classmethod
    def from_listing(cls, listing) -> "ListingDraft":
        return cls(
            title=listing.title,
            description=listing.description,
            price=listing.price,
            owner=listing.owner,
            is_published=listing.is_published,
        )
