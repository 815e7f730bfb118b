"""
Shopfront Backend: Product Route Handlers
==========================================

What:  CRUD endpoints for products.
How:   Each handler is a short pipeline: (authenticate) → (strip blanks) →
       service call → not-found / ownership guards → response. No handler
       catches exceptions; they propagate to the handlers in `app.main`.

Route Inventory:
    GET    /products                       list all              200
    GET    /products/category/{category}   list by category      200
    GET    /products/{product_id}          show, owner expanded  200 / 404
    POST   /products                       create (auth)         201
    PATCH  /products/{product_id}          partial update (auth) 204 / 403 / 404
    DELETE /products/{product_id}          delete (auth)         204 / 403 / 404
"""

import logging
from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import require_token
from app.database import get_db_session
from app.guards import handle_404, require_ownership
from app.middleware.remove_blanks import blank_stripped_body
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.product import (
    ProductCreateRequest,
    ProductDetailEnvelope,
    ProductDetailResponse,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdateRequest,
)
from app.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

AUTH_ERRORS = {
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
}
OWNED_RESOURCE_ERRORS = {
    **AUTH_ERRORS,
    403: {"description": "Product belongs to another user", "model": ErrorResponse},
    404: {"description": "Product not found", "model": ErrorResponse},
}


@router.get(
    "/products",
    response_model=ProductListEnvelope,
    summary="List all products",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> ProductListEnvelope:
    products = await product_service.list_products(db)
    return ProductListEnvelope(products=[ProductResponse.from_model(p) for p in products])


@router.get(
    "/products/category/{category}",
    response_model=ProductListEnvelope,
    summary="List products in one category",
    description="Exact, case-sensitive match on the product's category.",
)
async def list_products_by_category(
    category: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProductListEnvelope:
    products = await product_service.list_products(db, category=category)
    return ProductListEnvelope(products=[ProductResponse.from_model(p) for p in products])


@router.get(
    "/products/{product_id}",
    response_model=ProductDetailEnvelope,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Show one product with its owner expanded",
)
async def show_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ProductDetailEnvelope:
    record = await product_service.get_product(db, product_id, expand_owner=True)
    product = handle_404(record, "product", product_id)
    return ProductDetailEnvelope(product=ProductDetailResponse.from_model(product))


@router.post(
    "/products",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERRORS,
    summary="Create a product owned by the requester",
)
async def create_product(
    payload: ProductCreateRequest,
    user: User = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> ProductEnvelope:
    """
    The owner is always the authenticated user; an `owner` key in the body
    is ignored.
    """
    product = await product_service.create_product(
        db, fields=payload.product.model_dump(), owner_id=user.id
    )
    return ProductEnvelope(product=ProductResponse.from_model(product))


@router.patch(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**OWNED_RESOURCE_ERRORS, 422: {"description": "Invalid fields", "model": ErrorResponse}},
    summary="Partially update a product you own",
)
async def update_product(
    product_id: UUID,
    user: User = Depends(require_token),
    body: Dict[str, Any] = Depends(blank_stripped_body),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Pipeline:
        1. require_token resolves the requester (401 otherwise)
        2. blank_stripped_body drops "" fields from the body
        3. lookup → 404 if missing → 403 if not the owner, whatever the body
        4. a client-supplied `owner` is removed, so it can never be written
        5. the remaining fields are validated (422 on failure) → update
    """
    record = await product_service.get_product(db, product_id)
    product = handle_404(record, "product", product_id)
    require_ownership(user, product, "product")

    fields = body.get("product")
    if isinstance(fields, dict):
        fields.pop("owner", None)
    changes = ProductUpdateRequest.model_validate(body).product.model_dump(exclude_unset=True)

    await product_service.update_product(db, product, changes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_RESOURCE_ERRORS,
    summary="Delete a product you own",
)
async def delete_product(
    product_id: UUID,
    user: User = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    record = await product_service.get_product(db, product_id)
    product = handle_404(record, "product", product_id)
    require_ownership(user, product, "product")

    await product_service.delete_product(db, product)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
