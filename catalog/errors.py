"""Catalog error taxonomy.

- ValidationError: malformed or missing field (HTTP 400, field-level details)
- NotFoundError: unknown product id (HTTP 404)
- StoreError: unexpected persistence failure (HTTP 500)
"""

from typing import Any


class CatalogError(Exception):
    """Base class for catalog errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Input failed validation. `details` holds one entry per failing field."""

    status_code = 400

    def __init__(self, details: list[dict[str, Any]], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.details = details

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @property
    def fields(self) -> list[str]:
        return [str(d.get("field", "")) for d in self.details]


class NotFoundError(CatalogError):
    status_code = 404

    def __init__(self, product_id: str) -> None:
        super().__init__("Product not found")
        self.product_id = product_id


class StoreError(CatalogError):
    """Unexpected persistence failure. The unit of work was rolled back."""

    status_code = 500
