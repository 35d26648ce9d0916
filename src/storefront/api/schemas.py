"""Pydantic wire schemas for the product/order API.

These are external contracts, kept apart from the domain models in
``storefront.catalogue`` and ``storefront.checkout``.
"""

from pydantic import BaseModel, Field


class ProductSchema(BaseModel):
    id: str
    title: str
    description: str | None = None
    price: float | None = None
    category: str
    image: str


class CatalogResponse(BaseModel):
    total: int | None = None
    items: list[ProductSchema]


class OrderRequest(BaseModel):
    payment: str
    address: str
    email: str
    phone: str
    items: list[str] = Field(min_length=1)
    total: float = Field(ge=0)


class OrderResponse(BaseModel):
    id: str
    total: float


class ErrorResponse(BaseModel):
    error: str
