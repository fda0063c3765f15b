"""
Listing model - the marketplace listing exposed as a REST resource.
Storage only: wire shape lives in resources/projection.py.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from listings_api.db.base import Base

if TYPE_CHECKING:
    from listings_api.db.models.user import User


class Listing(Base):
    """Listing entity. createdAt is set once at construction; isPublished starts False."""

    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # Normalized form: line breaks already replaced by <br />
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Price in cents
    price: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_published: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    owner: Mapped["User"] = relationship("User")

    def __init__(self, title: str | None = None, **kwargs):
        kwargs.setdefault("created_at", datetime.now(timezone.utc))
        kwargs.setdefault("is_published", False)
        super().__init__(title=title, **kwargs)

    @validates("created_at")
    def _set_created_at_once(self, key, value):
        if self.created_at is not None:
            raise AttributeError("created_at is immutable once set")
        return value

    @validates("is_published")
    def _keep_is_published_boolean(self, key, value):
        if not isinstance(value, bool):
            raise TypeError("is_published must be a bool")
        return value

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, title={self.title})>"
