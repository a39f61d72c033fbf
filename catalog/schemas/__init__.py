"""Pydantic schemas for API request/response validation."""

from catalog.schemas.common import ErrorResponse, FieldError
from catalog.schemas.product import (
    ImageDocument,
    MessageResponse,
    OptionDocument,
    ProductDocument,
    ProductInput,
    ProductListResponse,
    ProductResponse,
    ProductStatus,
    ProductUpdate,
    TagListResponse,
    VariantDocument,
)

__all__ = [
    "ErrorResponse",
    "FieldError",
    "ImageDocument",
    "MessageResponse",
    "OptionDocument",
    "ProductDocument",
    "ProductInput",
    "ProductListResponse",
    "ProductResponse",
    "ProductStatus",
    "ProductUpdate",
    "TagListResponse",
    "VariantDocument",
]
