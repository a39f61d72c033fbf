"""Form validation contract for product submission.

The admin form posts flat string fields. ProductForm checks them and
to_input() turns them into a ProductInput:
- tags "a, b, c" -> ["a", "b", "c"]
- image_url -> one-element image list
- option_name + option_values -> one option (only when both are present)
- price / sku / inventory -> a single "Default" variant
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from catalog.errors import ValidationError
from catalog.schemas import (
    FieldError,
    ImageDocument,
    OptionDocument,
    ProductInput,
    ProductStatus,
    VariantDocument,
)
from catalog.services.normalizer import MAX_AMOUNT, parse_decimal, round_to_cents

DEFAULT_VARIANT_TITLE = "Default"


class ProductForm(BaseModel):
    """Flat product form as submitted by the admin UI."""

    title: str = Field(min_length=1)
    body_html: str = Field(min_length=50)
    vendor: str = Field(min_length=1)
    product_type: str | None = None
    tags: str | None = None  # comma separated
    image_url: str | None = None
    status: ProductStatus
    option_name: str | None = None  # e.g. "Size"
    option_values: str | None = None  # e.g. "S, M, L, XL"
    price: str = Field(min_length=1)
    sku: str | None = None
    inventory: str | None = None

    model_config = {"extra": "ignore", "str_strip_whitespace": False}

    @field_validator("title", "vendor")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be blank")
        return v

    @field_validator("price")
    @classmethod
    def _positive_price(cls, v: str) -> str:
        try:
            amount = Decimal(v.strip())
        except InvalidOperation:
            raise ValueError("Price must be a number") from None
        if not amount.is_finite():
            raise ValueError("Price must be a number")
        if amount > MAX_AMOUNT:
            raise ValueError(f"Price must be at most {MAX_AMOUNT}")
        # Checked after rounding so "0.001" fails here rather than as a variant price.
        if amount <= 0 or round_to_cents(amount) <= 0:
            raise ValueError("Price must be greater than 0")
        return v

    @field_validator("inventory")
    @classmethod
    def _non_negative_int(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        value = v.strip()
        if value.startswith("-") and value[1:].isdigit():
            raise ValueError("Inventory must not be negative")
        # Plain ASCII digits only: no sign, no underscores, no fullwidth digits.
        if not (value.isascii() and value.isdigit()):
            raise ValueError("Inventory must be a whole number")
        return v

    def to_input(self) -> ProductInput:
        """Convert the flat form into product fields with child collections."""
        options: list[OptionDocument] = []
        if self.option_name and self.option_values:
            options.append(
                OptionDocument(
                    name=self.option_name.strip(),
                    values=split_comma_list(self.option_values),
                )
            )

        return ProductInput(
            title=self.title,
            body_html=self.body_html,
            vendor=self.vendor,
            product_type=self.product_type or None,
            status=self.status,
            tags=split_comma_list(self.tags),
            images=[ImageDocument(src=self.image_url.strip())] if self.image_url and self.image_url.strip() else [],
            options=options,
            variants=[
                VariantDocument(
                    title=DEFAULT_VARIANT_TITLE,
                    price=parse_decimal(self.price, field="price"),
                    sku=self.sku or None,
                    inventory_quantity=int(self.inventory.strip()) if self.inventory else 0,
                )
            ],
        )


def parse_product_form(payload: dict[str, Any]) -> ProductForm:
    """Validate a raw form payload.

    Raises:
        ValidationError: With one {"field", "message"} entry per failing field.
    """
    try:
        return ProductForm.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(field_errors(e.errors())) from e


def field_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic error entries into {"field", "message"} details."""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(
            FieldError(
                field=".".join(loc) or "__root__",
                message=_message(err),
            ).model_dump()
        )
    return details


def split_comma_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _message(err: dict[str, Any]) -> str:
    msg = str(err.get("msg", "Invalid value"))
    # pydantic prefixes custom validator messages with "Value error, "
    return msg.removeprefix("Value error, ")
