"""Unit tests for the record <-> document normalizer (no database)."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from catalog.errors import ValidationError
from catalog.schemas import ImageDocument, OptionDocument, ProductDocument, ProductStatus, VariantDocument
from catalog.services.normalizer import (
    join_option_values,
    parse_decimal,
    split_option_values,
    to_document,
    to_write_set,
)
from catalog.stores.records import OptionRow, ProductRecord, ProductRow, TagRow, VariantRow

CREATED = datetime(2026, 1, 5, 12, 30, tzinfo=timezone.utc)


def _document(**overrides) -> ProductDocument:
    fields = dict(
        id="product-1",
        title="Leather Messenger Bag",
        body_html="A beautiful handcrafted leather messenger bag. Perfect for work or school.",
        vendor="Artisan Bags",
        product_type="Bags",
        handle="leather-messenger-bag",
        status=ProductStatus.ACTIVE,
        tags=["leather", "bag", "handmade"],
        images=[
            ImageDocument(id="img-1", src="https://example.com/front.jpg", alt="Front", width=800, height=600),
            ImageDocument(id="img-2", src="https://example.com/side.jpg"),
        ],
        options=[OptionDocument(id="opt-1", name="Color", values=["Brown", "Black", "Tan"])],
        variants=[
            VariantDocument(
                id="variant-1",
                title="Brown",
                price=Decimal("149.99"),
                compare_at_price=Decimal("199.99"),
                sku="BAG-001",
                inventory_quantity=10,
                option_values=["Brown"],
            ),
            VariantDocument(id="variant-2", title="Black", price=Decimal("139.00")),
        ],
        created_at=CREATED,
        published_at=CREATED,
    )
    fields.update(overrides)
    return ProductDocument(**fields)


def test_round_trip_reproduces_document() -> None:
    doc = _document()
    assert to_document(to_write_set(doc)) == doc


def test_round_trip_draft_without_children() -> None:
    doc = _document(status=ProductStatus.DRAFT, published_at=None, tags=[], images=[], options=[])
    assert to_document(to_write_set(doc)) == doc


def test_write_set_joins_option_values() -> None:
    record = to_write_set(_document())
    assert record.options[0].values == "Brown, Black, Tan"


def test_write_set_tags_become_distinct_rows() -> None:
    record = to_write_set(_document(tags=["sale", "leather", "sale"]))
    assert [t.name for t in record.tags] == ["sale", "leather"]


def test_write_set_assigns_missing_child_ids_and_positions() -> None:
    doc = _document(variants=[VariantDocument(price=Decimal("5")), VariantDocument(price=Decimal("6"))])
    record = to_write_set(doc)
    assert all(v.id for v in record.variants)
    assert record.variants[0].id != record.variants[1].id
    assert [v.position for v in record.variants] == [0, 1]
    assert record.variants[0].price == Decimal("5.00")


def test_write_set_requires_title_and_variant() -> None:
    with pytest.raises(ValidationError) as exc:
        to_write_set(_document(title="  ", variants=[]))
    assert set(exc.value.fields) == {"title", "variants"}


def test_to_document_splits_and_trims_option_values() -> None:
    record = ProductRecord(
        product=ProductRow(id="p", title="Tee", status="draft", created_at=datetime(2026, 1, 1)),
        variants=[VariantRow(id="v", position=0, price=Decimal("10.00"))],
        options=[OptionRow(id="o", position=0, name="Size", values=" S ,M,  L ,")],
        tags=[TagRow(name="cotton")],
    )
    doc = to_document(record)
    assert doc.options[0].values == ["S", "M", "L"]
    assert doc.tags == ["cotton"]
    # naive timestamps from the database are read as UTC
    assert doc.created_at.tzinfo is timezone.utc


def test_to_document_orders_children_by_position() -> None:
    record = ProductRecord(
        product=ProductRow(id="p", title="Tee", status="active", created_at=CREATED),
        variants=[
            VariantRow(id="second", position=1, price=Decimal("2.00")),
            VariantRow(id="first", position=0, price=Decimal("1.00")),
        ],
    )
    assert [v.id for v in to_document(record).variants] == ["first", "second"]


def test_option_values_helpers() -> None:
    assert split_option_values("") == []
    assert split_option_values(None) == []
    assert join_option_values([" S", "M ", ""]) == "S, M"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("19.99", Decimal("19.99")),
        (" 5 ", Decimal("5.00")),
        (0.1, Decimal("0.10")),
        (7, Decimal("7.00")),
        (Decimal("2.345"), Decimal("2.35")),
        ("9999999999.99", Decimal("9999999999.99")),
    ],
)
def test_parse_decimal_accepts_numbers(value, expected) -> None:
    assert parse_decimal(value, field="price") == expected


@pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", "-1", "1e100", "10000000000.00", True, None])
def test_parse_decimal_rejects_malformed(value) -> None:
    with pytest.raises(ValidationError) as exc:
        parse_decimal(value, field="variants.0.price")
    assert exc.value.fields == ["variants.0.price"]


def test_variant_option_values_are_joined_and_split() -> None:
    doc = _document(
        variants=[VariantDocument(id="v-1", price=Decimal("10"), option_values=[" Brown", "Large "])]
    )
    record = to_write_set(doc)
    assert record.variants[0].option_values == "Brown, Large"
    assert to_document(record).variants[0].option_values == ["Brown", "Large"]
