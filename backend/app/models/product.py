"""
Shopfront Backend: Product SQLAlchemy Model
============================================

What:  ORM model representing the `products` table.
Who:   Used by ProductService for CRUD and by Alembic for schema management.

Lifecycle:
    1. Created by POST /products; `owner_id` is always the requester
    2. Partially updated by PATCH /products/{id}; `owner_id` never changes
    3. Deleted by DELETE /products/{id}; favorites pointing at it are
       removed by the `ON DELETE CASCADE` on `favorites.product_id`

Query Patterns:
    - List all:          SELECT ... ORDER BY created_at
    - List by category:  SELECT ... WHERE category = :category
      → idx_products_category
    - Show one:          SELECT ... WHERE id = :uuid, then
                         SELECT users WHERE id IN (...) for the owner
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """
    A product listed in the shop by one user.

    Only `category` and `owner_id` are required; the descriptive fields are
    optional so a product can be created with a category alone.
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    price: Mapped[float | None] = mapped_column(Float, nullable=True)

    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Exact-match filter target for GET /products/category/{category}
    category: Mapped[str] = mapped_column(String(100), nullable=False)

    # Set once at creation from the bearer token; never written again.
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

    # Loaded only when a query asks for it with selectinload(Product.owner)
    owner: Mapped[User] = relationship(User)

    __table_args__ = (
        Index("idx_products_category", "category"),
        Index("idx_products_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, category='{self.category}', "
            f"owner_id={self.owner_id})>"
        )
