"""Schemas for product documents and product payloads.

The document shape is the nested, client-facing representation of a product:
scalar fields plus inline variants, images, options and tags.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

# Decimals stay exact in Python and render as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductStatus(str, Enum):
    """Product lifecycle status."""

    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


class VariantDocument(BaseModel):
    """A purchasable configuration of a product."""

    id: str | None = None
    title: str | None = None
    price: Money
    compare_at_price: Money | None = None
    sku: str | None = None
    inventory_quantity: int = 0
    requires_shipping: bool = True
    taxable: bool = True
    option_values: list[str] = Field(default_factory=list)  # chosen value per option, in option order


class ImageDocument(BaseModel):
    id: str | None = None
    src: str
    alt: str | None = None
    width: int | None = None
    height: int | None = None


class OptionDocument(BaseModel):
    id: str | None = None
    name: str
    values: list[str] = Field(default_factory=list)


class ProductDocument(BaseModel):
    """Full product document as returned by the API."""

    id: str
    title: str
    body_html: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    handle: str | None = None
    status: ProductStatus = ProductStatus.DRAFT
    tags: list[str] = Field(default_factory=list)
    images: list[ImageDocument] = Field(default_factory=list)
    options: list[OptionDocument] = Field(default_factory=list)
    variants: list[VariantDocument] = Field(default_factory=list)
    created_at: datetime
    published_at: datetime | None = None


class ProductInput(BaseModel):
    """Everything needed to create a product (id and timestamps are assigned on create)."""

    title: str
    body_html: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    handle: str | None = None
    status: ProductStatus = ProductStatus.DRAFT
    tags: list[str] = Field(default_factory=list)
    images: list[ImageDocument] = Field(default_factory=list)
    options: list[OptionDocument] = Field(default_factory=list)
    variants: list[VariantDocument] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Partial update in document shape.

    Only fields present in the payload are applied. A present child
    collection replaces the stored one entirely.
    """

    title: str | None = None
    body_html: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    handle: str | None = None
    status: ProductStatus | None = None
    tags: list[str] | None = None
    images: list[ImageDocument] | None = None
    options: list[OptionDocument] | None = None
    variants: list[VariantDocument] | None = None

    model_config = {"extra": "ignore"}


class ProductResponse(BaseModel):
    product: ProductDocument


class ProductListResponse(BaseModel):
    products: list[ProductDocument]


class TagListResponse(BaseModel):
    tags: list[str]


class MessageResponse(BaseModel):
    message: str
