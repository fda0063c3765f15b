from listings_api.db.models.listing import Listing
from listings_api.db.models.user import User

__all__ = ["Listing", "User"]
