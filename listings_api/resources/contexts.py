"""
Operation contexts for the listing resource.
Each HTTP operation maps to exactly one context; projection and validation tables are keyed by it.
"""

from enum import Enum


class Context(str, Enum):
    COLLECTION_READ = "listing:read:collection"
    ITEM_READ = "listing:read:item"
    CREATE = "listing:write:create"
    UPDATE = "listing:write:update"
    PUBLICATION = "listing:write:publication"

    @property
    def is_read(self) -> bool:
        return self in (Context.COLLECTION_READ, Context.ITEM_READ)

    @property
    def is_write(self) -> bool:
        return not self.is_read
