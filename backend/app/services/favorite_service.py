"""
Shopfront Backend: Favorite Service (Repository Access)
========================================================

What:  Thin async calls into the database for favorites.
Who:   Called by `app.routes.favorites`.

`list_favorites` expands both references with selectinload: one query for
the favorites, one for their products and one for their owners.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.favorite import Favorite

logger = logging.getLogger(__name__)


class FavoriteService:

    async def list_favorites(self, db: AsyncSession) -> List[Favorite]:
        """All favorites in creation order, with `product` and `owner` loaded."""
        result = await db.execute(
            select(Favorite)
            .options(selectinload(Favorite.product), selectinload(Favorite.owner))
            .order_by(Favorite.created_at, Favorite.id)
        )
        return list(result.scalars().all())

    async def get_favorite(self, db: AsyncSession, favorite_id: UUID) -> Optional[Favorite]:
        result = await db.execute(select(Favorite).where(Favorite.id == favorite_id))
        return result.scalar_one_or_none()

    async def create_favorite(
        self,
        db: AsyncSession,
        product_id: UUID,
        owner_id: UUID,
    ) -> Favorite:
        """
        Insert a favorite owned by `owner_id`.

        An unknown `product_id` fails the flush with an IntegrityError
        (foreign key), which is reported to the client as a 422.
        """
        favorite = Favorite(product_id=product_id, owner_id=owner_id)
        db.add(favorite)
        await db.flush()
        logger.info(
            "Favorite %s created: user %s → product %s", favorite.id, owner_id, product_id
        )
        return favorite

    async def delete_favorite(self, db: AsyncSession, favorite: Favorite) -> None:
        await db.delete(favorite)
        await db.flush()
        logger.info("Favorite %s deleted", favorite.id)


favorite_service = FavoriteService()
