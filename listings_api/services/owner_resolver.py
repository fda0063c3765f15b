"""
Owner resolver - turns a submitted owner reference into a User.
Accepts an integer id, a numeric string, or a user IRI (/api/v1/users/{id}).
Anything that does not match a stored user comes back as UnresolvedReference for validation to report.
"""

from typing import Any

from listings_api.db.models.user import User
from listings_api.db.repositories.user_repository import UserRepository
from listings_api.resources.projection import USER_IRI_PREFIX
from listings_api.resources.validation import INTEGER_MAX, UnresolvedReference


def parse_user_reference(raw: Any) -> int | None:
    """Extract a user id from the wire value. None when the value is not a reference at all."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text.startswith(USER_IRI_PREFIX):
            text = text[len(USER_IRI_PREFIX):]
        if text.isdigit():
            return int(text)
    return None


class OwnerResolver:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def resolve(self, raw: Any) -> User | UnresolvedReference | None:
        if raw is None:
            return None
        user_id = parse_user_reference(raw)
        if user_id is None or user_id > INTEGER_MAX:
            return UnresolvedReference(raw)
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            return UnresolvedReference(raw)
        return user
