"""Typed row projections exchanged between the record store and the normalizer.

A ProductRecord is one product row plus its eagerly loaded child rows. The
store reads and writes records; it never hands ORM objects to callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class ProductRow:
    id: str
    title: str
    status: str
    created_at: datetime
    body_html: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    handle: str | None = None
    published_at: datetime | None = None


@dataclass(frozen=True)
class VariantRow:
    id: str
    position: int
    price: Decimal
    title: str | None = None
    compare_at_price: Decimal | None = None
    sku: str | None = None
    inventory_quantity: int = 0
    requires_shipping: bool = True
    taxable: bool = True
    option_values: str = ""  # delimited, e.g. "Brown, Large"


@dataclass(frozen=True)
class ImageRow:
    id: str
    position: int
    src: str
    alt: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class OptionRow:
    id: str
    position: int
    name: str
    values: str  # delimited, e.g. "S, M, L"


@dataclass(frozen=True)
class TagRow:
    name: str


@dataclass(frozen=True)
class ProductRecord:
    """A product row with all four child collections."""

    product: ProductRow
    variants: list[VariantRow] = field(default_factory=list)
    images: list[ImageRow] = field(default_factory=list)
    options: list[OptionRow] = field(default_factory=list)
    tags: list[TagRow] = field(default_factory=list)


# Child collection names, as they appear on both the record and the document.
CHILD_COLLECTIONS = ("variants", "images", "options", "tags")
