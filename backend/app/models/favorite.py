"""
Shopfront Backend: Favorite SQLAlchemy Model
=============================================

What:  ORM model for the `favorites` table: a user's bookmark of a product.
Who:   Used by FavoriteService and by Alembic.

Favorites are created and deleted, never updated. A user may bookmark the
same product more than once; no uniqueness is enforced.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.product import Product
from app.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Favorite(Base):
    __tablename__ = "favorites"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    product: Mapped[Product] = relationship(Product)
    owner: Mapped[User] = relationship(User)

    __table_args__ = (
        Index("idx_favorites_owner_id", "owner_id"),
        Index("idx_favorites_product_id", "product_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Favorite(id={self.id}, product_id={self.product_id}, "
            f"owner_id={self.owner_id})>"
        )
