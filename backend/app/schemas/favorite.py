"""
Shopfront Backend: Favorite Request/Response Schemas
=====================================================

    POST /favorites   {"favorite": {"product": "<uuid>"}}  → 201 {"favorite": FavoriteResponse}
    GET  /favorites                                        → 200 {"favorites": [FavoriteDetailResponse]}

The list response expands both `product` and `owner`. A creation response
returns them as ids.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.favorite import Favorite
from app.schemas.product import ProductResponse
from app.schemas.user import UserPublic


class FavoriteCreate(BaseModel):
    """Payload for POST /favorites. A client-supplied `owner` is ignored."""
    product: uuid.UUID = Field(description="Id of the product to bookmark")


class FavoriteCreateRequest(BaseModel):
    favorite: FavoriteCreate


class FavoriteResponse(BaseModel):
    id: uuid.UUID
    product: uuid.UUID
    owner: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, favorite: Favorite) -> "FavoriteResponse":
        return cls(
            id=favorite.id,
            product=favorite.product_id,
            owner=favorite.owner_id,
            created_at=favorite.created_at,
            updated_at=favorite.updated_at,
        )


class FavoriteDetailResponse(BaseModel):
    """
    A favorite with `product` and `owner` expanded.

    Both are Optional: a reference whose row is gone expands to null rather
    than failing the whole listing.
    """
    id: uuid.UUID
    product: Optional[ProductResponse]
    owner: Optional[UserPublic]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, favorite: Favorite) -> "FavoriteDetailResponse":
        return cls(
            id=favorite.id,
            product=ProductResponse.from_model(favorite.product) if favorite.product else None,
            owner=UserPublic.model_validate(favorite.owner) if favorite.owner else None,
            created_at=favorite.created_at,
            updated_at=favorite.updated_at,
        )


class FavoriteEnvelope(BaseModel):
    favorite: FavoriteResponse


class FavoriteListEnvelope(BaseModel):
    favorites: List[FavoriteDetailResponse]
