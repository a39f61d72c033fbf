"""Shape normalizer: relational record <-> nested product document.

Read direction (to_document):
- tags -> plain list of names
- images/options/variants -> ordered lists of their field projections
- option values and variant option_values "S, M, L" -> ["S", "M", "L"]
  (split on comma, trimmed)

Write direction (to_write_set):
- option values and variant option_values lists -> ", "-joined string
- tags -> one tag row per distinct name
- price / compare_at_price -> Decimal with 2 places

Both directions are pure: no session, no I/O.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from catalog.errors import ValidationError
from catalog.models import generate_id
from catalog.schemas import (
    ImageDocument,
    OptionDocument,
    ProductDocument,
    ProductStatus,
    VariantDocument,
)
from catalog.stores.records import ImageRow, OptionRow, ProductRecord, ProductRow, TagRow, VariantRow

OPTION_VALUES_DELIMITER = ","
OPTION_VALUES_JOINER = ", "

_CENT = Decimal("0.01")

# Largest amount a NUMERIC(12, 2) column holds.
MAX_AMOUNT = Decimal("9999999999.99")


def to_document(record: ProductRecord) -> ProductDocument:
    """Assemble a product document from a product record."""
    p = record.product
    return ProductDocument(
        id=p.id,
        title=p.title,
        body_html=p.body_html,
        vendor=p.vendor,
        product_type=p.product_type,
        handle=p.handle,
        status=ProductStatus(p.status),
        tags=[t.name for t in record.tags],
        images=[
            ImageDocument(id=i.id, src=i.src, alt=i.alt, width=i.width, height=i.height)
            for i in sorted(record.images, key=lambda r: r.position)
        ],
        options=[
            OptionDocument(id=o.id, name=o.name, values=split_option_values(o.values))
            for o in sorted(record.options, key=lambda r: r.position)
        ],
        variants=[
            VariantDocument(
                id=v.id,
                title=v.title,
                price=v.price,
                compare_at_price=v.compare_at_price,
                sku=v.sku,
                inventory_quantity=v.inventory_quantity,
                requires_shipping=v.requires_shipping,
                option_values=split_option_values(v.option_values),
                taxable=v.taxable,
            )
            for v in sorted(record.variants, key=lambda r: r.position)
        ],
        created_at=_as_utc(p.created_at),
        published_at=_as_utc(p.published_at) if p.published_at else None,
    )


def to_write_set(document: ProductDocument) -> ProductRecord:
    """Decompose a product document into the rows to persist.

    Raises:
        ValidationError: Empty title, no variants, or a malformed price.
    """
    errors: list[dict[str, str]] = []

    if not document.title or not document.title.strip():
        errors.append({"field": "title", "message": "Title is required"})
    if not document.variants:
        errors.append({"field": "variants", "message": "At least one variant is required"})

    variants: list[VariantRow] = []
    for position, v in enumerate(document.variants):
        try:
            price = parse_decimal(v.price, field=f"variants.{position}.price")
            compare_at = (
                parse_decimal(v.compare_at_price, field=f"variants.{position}.compare_at_price")
                if v.compare_at_price is not None
                else None
            )
        except ValidationError as e:
            errors.extend(e.details)
            continue
        variants.append(
            VariantRow(
                id=v.id or generate_id(),
                position=position,
                title=v.title,
                price=price,
                compare_at_price=compare_at,
                sku=v.sku,
                inventory_quantity=v.inventory_quantity,
                requires_shipping=v.requires_shipping,
                taxable=v.taxable,
                option_values=join_option_values(v.option_values),
            )
        )

    if errors:
        raise ValidationError(errors)

    return ProductRecord(
        product=ProductRow(
            id=document.id,
            title=document.title,
            status=ProductStatus(document.status).value,
            created_at=document.created_at,
            body_html=document.body_html,
            vendor=document.vendor,
            product_type=document.product_type,
            handle=document.handle,
            published_at=document.published_at,
        ),
        variants=variants,
        images=[
            ImageRow(
                id=i.id or generate_id(),
                position=position,
                src=i.src,
                alt=i.alt,
                width=i.width,
                height=i.height,
            )
            for position, i in enumerate(document.images)
        ],
        options=[
            OptionRow(
                id=o.id or generate_id(),
                position=position,
                name=o.name,
                values=join_option_values(o.values),
            )
            for position, o in enumerate(document.options)
        ],
        tags=[TagRow(name=name) for name in dedupe_tags(document.tags)],
    )


def split_option_values(stored: str | None) -> list[str]:
    """Split a stored option values string ("S, M, L") into a list."""
    if not stored:
        return []
    return [part.strip() for part in stored.split(OPTION_VALUES_DELIMITER) if part.strip()]


def join_option_values(values: list[str]) -> str:
    """Join option values into the stored delimited string."""
    return OPTION_VALUES_JOINER.join(v.strip() for v in values if v.strip())


def dedupe_tags(tags: list[str]) -> list[str]:
    """Drop blank and exact-duplicate tag names, keeping first occurrence order."""
    return list(dict.fromkeys(t for t in tags if t))


def parse_decimal(value: Decimal | str | int | float | None, *, field: str) -> Decimal:
    """Parse a money amount into a 2-place Decimal.

    Accepts Decimal, int, float (via its repr, not its binary value) and
    numeric strings. Rejects booleans, NaN/Infinity, negatives and amounts
    above MAX_AMOUNT.

    Raises:
        ValidationError: If the value is not a finite, non-negative number.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError.for_field(field, "Must be a number")
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, float):
            amount = Decimal(repr(value))
        else:
            amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError.for_field(field, f"Invalid decimal: {value!r}") from None

    if not amount.is_finite():
        raise ValidationError.for_field(field, f"Invalid decimal: {value!r}")
    if amount < 0:
        raise ValidationError.for_field(field, "Must be greater than or equal to 0")
    if amount > MAX_AMOUNT:
        raise ValidationError.for_field(field, f"Must be at most {MAX_AMOUNT}")
    return round_to_cents(amount)


def round_to_cents(amount: Decimal) -> Decimal:
    """Round half-up to 2 places. `amount` must already be within MAX_AMOUNT."""
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
