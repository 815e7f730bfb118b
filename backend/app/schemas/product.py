"""
Shopfront Backend: Product Request/Response Schemas
====================================================

What:  Pydantic models defining the product API contract.
How:   Bodies are wrapped in a `product` key, as are single-item responses;
       list responses are wrapped in `products`.

    POST  /products          {"product": ProductCreate}  → 201 {"product": ProductResponse}
    PATCH /products/{id}     {"product": ProductUpdate}  → 204
    GET   /products/{id}                                 → 200 {"product": ProductDetailResponse}
    GET   /products[/category/{c}]                       → 200 {"products": [ProductResponse]}

Responses carry `owner` as a user id, except the detail response where it is
expanded into a UserPublic object.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.product import Product
from app.schemas.user import UserPublic


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductFields(BaseModel):
    """Descriptive fields shared by create and update payloads; all optional."""
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)
    price: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = Field(default=None, max_length=512)


class ProductCreate(ProductFields):
    """
    What:  Payload for POST /products.

    Unknown keys, including any client-supplied `owner`, are ignored; the
    owner always comes from the bearer token.
    """
    category: str = Field(min_length=1, max_length=100)


class ProductUpdate(ProductFields):
    """
    What:  Payload for PATCH /products/{id}; only the keys present are written.

    Unknown keys are rejected. The route removes `owner` before validation,
    so it is the one key that is silently dropped rather than refused.
    """
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def category_not_null(self) -> "ProductUpdate":
        if "category" in self.model_fields_set and self.category is None:
            raise ValueError("category cannot be null")
        return self


class ProductCreateRequest(BaseModel):
    product: ProductCreate


class ProductUpdateRequest(BaseModel):
    product: ProductUpdate


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """A product with its owner as a bare id."""
    id: uuid.UUID = Field(description="Product identifier")
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    category: str = Field(description="Product category")
    owner: uuid.UUID = Field(description="Id of the user who created the product")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            category=product.category,
            owner=product.owner_id,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductDetailResponse(BaseModel):
    """
    A product with `owner` expanded.

    The product must have been loaded with selectinload(Product.owner);
    touching an unloaded relationship on an async session raises.
    """
    id: uuid.UUID
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    category: str
    owner: UserPublic
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, product: Product) -> "ProductDetailResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            category=product.category,
            owner=UserPublic.model_validate(product.owner),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductEnvelope(BaseModel):
    product: ProductResponse


class ProductDetailEnvelope(BaseModel):
    product: ProductDetailResponse


class ProductListEnvelope(BaseModel):
    products: List[ProductResponse]
