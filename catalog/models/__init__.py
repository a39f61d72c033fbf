"""SQLAlchemy ORM models.

Models represent database tables:
- Product: catalog product (scalar fields + timestamps)
- ProductVariant, ProductImage, ProductOption, ProductTag: owned child rows
"""

from catalog.models.product import (
    Product,
    ProductImage,
    ProductOption,
    ProductTag,
    ProductVariant,
    generate_id,
)

__all__ = [
    "Product",
    "ProductImage",
    "ProductOption",
    "ProductTag",
    "ProductVariant",
    "generate_id",
]
