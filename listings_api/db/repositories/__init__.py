# Repository pattern: data access behind small async classes

from listings_api.db.repositories.listing_repository import ListingFilters, ListingRepository
from listings_api.db.repositories.user_repository import UserRepository

__all__ = ["ListingFilters", "ListingRepository", "UserRepository"]
