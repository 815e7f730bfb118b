"""
Shopfront Backend: Product Service (Repository Access)
=======================================================

What:  Thin async calls into the database for products.
How:   Each method issues one statement (or one flush) on the session it is
       given and returns ORM objects. Absent rows come back as None; turning
       that into a 404, and checking ownership, is the route handler's job.
Who:   Called by `app.routes.products`.

Reference expansion:
    `get_product(..., expand_owner=True)` eagerly loads the owner with
    selectinload, so the returned Product carries a materialized `owner` and
    the handler never triggers a lazy load on the async session.

Errors are not caught here. SQLAlchemy exceptions propagate to the handlers
registered in `app.main`, and `get_db_session` rolls the transaction back.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.product import Product

logger = logging.getLogger(__name__)


class ProductService:
    """
    Data access for the `products` table.

    Stateless: the session is passed into every call, so a single module
    level instance serves all requests.
    """

    async def list_products(
        self,
        db: AsyncSession,
        category: Optional[str] = None,
    ) -> List[Product]:
        """
        All products in creation order, optionally filtered by exact category.

        Query plan (with category):
            SELECT * FROM products WHERE category = :category ORDER BY created_at
            → idx_products_category
        """
        query = select(Product)
        if category is not None:
            query = query.where(Product.category == category)
        query = query.order_by(Product.created_at, Product.id)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_product(
        self,
        db: AsyncSession,
        product_id: UUID,
        expand_owner: bool = False,
    ) -> Optional[Product]:
        """Single product by id, or None. Optionally with `owner` loaded."""
        query = select(Product).where(Product.id == product_id)
        if expand_owner:
            query = query.options(selectinload(Product.owner))

        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create_product(
        self,
        db: AsyncSession,
        fields: Dict[str, Any],
        owner_id: UUID,
    ) -> Product:
        """
        Insert a product owned by `owner_id`.

        Any `owner`/`owner_id` key in `fields` is discarded; the owner passed
        explicitly always wins.
        """
        values = {k: v for k, v in fields.items() if k not in ("owner", "owner_id", "id")}
        product = Product(**values, owner_id=owner_id)
        db.add(product)
        # Flush assigns defaults without committing (commit happens in get_db_session)
        await db.flush()
        logger.info("Product %s created by user %s", product.id, owner_id)
        return product

    async def update_product(
        self,
        db: AsyncSession,
        product: Product,
        changes: Dict[str, Any],
    ) -> Product:
        """Apply a partial update. Ownership is never writable through here."""
        for field, value in changes.items():
            if field in ("id", "owner", "owner_id"):
                continue
            setattr(product, field, value)
        await db.flush()
        logger.info("Product %s updated: %s", product.id, sorted(changes))
        return product

    async def delete_product(self, db: AsyncSession, product: Product) -> None:
        await db.delete(product)
        await db.flush()
        logger.info("Product %s deleted", product.id)


product_service = ProductService()
