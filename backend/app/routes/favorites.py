"""
Shopfront Backend: Favorite Route Handlers
===========================================

Route Inventory:
    GET    /favorites                 list, product + owner expanded   200
    POST   /favorites                 bookmark a product (auth)        201
    DELETE /favorites/{favorite_id}   remove a bookmark you own (auth) 204 / 403 / 404
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import require_token
from app.database import get_db_session
from app.guards import handle_404, require_ownership
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.favorite import (
    FavoriteCreateRequest,
    FavoriteDetailResponse,
    FavoriteEnvelope,
    FavoriteListEnvelope,
    FavoriteResponse,
)
from app.services.favorite_service import favorite_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Favorites"])


@router.get(
    "/favorites",
    response_model=FavoriteListEnvelope,
    summary="List all favorites with product and owner expanded",
)
async def list_favorites(
    db: AsyncSession = Depends(get_db_session),
) -> FavoriteListEnvelope:
    favorites = await favorite_service.list_favorites(db)
    return FavoriteListEnvelope(
        favorites=[FavoriteDetailResponse.from_model(f) for f in favorites]
    )


@router.post(
    "/favorites",
    response_model=FavoriteEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        422: {"description": "Invalid body or unknown product", "model": ErrorResponse},
    },
    summary="Bookmark a product for the requester",
)
async def create_favorite(
    payload: FavoriteCreateRequest,
    user: User = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> FavoriteEnvelope:
    favorite = await favorite_service.create_favorite(
        db, product_id=payload.favorite.product, owner_id=user.id
    )
    return FavoriteEnvelope(favorite=FavoriteResponse.from_model(favorite))


@router.delete(
    "/favorites/{favorite_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        403: {"description": "Favorite belongs to another user", "model": ErrorResponse},
        404: {"description": "Favorite not found", "model": ErrorResponse},
    },
    summary="Remove a favorite you own",
)
async def delete_favorite(
    favorite_id: UUID,
    user: User = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    record = await favorite_service.get_favorite(db, favorite_id)
    favorite = handle_404(record, "favorite", favorite_id)
    require_ownership(user, favorite, "favorite")

    await favorite_service.delete_favorite(db, favorite)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
