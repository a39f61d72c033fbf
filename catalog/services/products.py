"""Catalog façade: CRUD and query operations over the product record store.

Every operation takes the store handle explicitly. Reads go through the
normalizer's to_document; writes go through to_write_set and end with a
commit, so a completed operation is visible to every later one.

Field rules shared by create and update (see check_product_fields):
- title, vendor: non-empty
- body_html: at least 50 characters
- variants: at least one, every price > 0
"""

from datetime import datetime, timezone
import logging
from typing import Any

from catalog.errors import NotFoundError, ValidationError
from catalog.models import generate_id
from catalog.schemas import ProductDocument, ProductInput, ProductStatus, ProductUpdate
from catalog.services.normalizer import parse_decimal, to_document, to_write_set
from catalog.stores.products import ProductRecordStore
from catalog.stores.records import CHILD_COLLECTIONS

logger = logging.getLogger("uvicorn.error")

MIN_DESCRIPTION_LENGTH = 50

# Child collections whose rows carry their own ids.
ID_COLLECTIONS = ("variants", "images", "options")


# ============================================================
# Reads
# ============================================================


async def list_products(store: ProductRecordStore) -> list[ProductDocument]:
    """All products, newest first."""
    return [to_document(r) for r in await store.scan()]


async def get_product(store: ProductRecordStore, product_id: str) -> ProductDocument | None:
    """One product, or None when the id is unknown."""
    record = await store.get(product_id)
    return to_document(record) if record else None


async def search_products(store: ProductRecordStore, query: str) -> list[ProductDocument]:
    """Case-insensitive substring match on title."""
    return [to_document(r) for r in await store.search_title(query)]


async def filter_by_tag(store: ProductRecordStore, tag: str) -> list[ProductDocument]:
    """Case-insensitive exact match against each product's tags."""
    return [to_document(r) for r in await store.with_tag(tag)]


async def list_tags(store: ProductRecordStore) -> list[str]:
    """Distinct tag names across all products, alphabetically."""
    return await store.tag_names()


# ============================================================
# Writes
# ============================================================


async def create_product(
    store: ProductRecordStore,
    data: ProductInput,
    *,
    product_id: str | None = None,
    now: datetime | None = None,
) -> ProductDocument:
    """Validate, assign id/timestamps, persist, and return the stored document.

    Args:
        store: Record store bound to the current session.
        data: Product fields and initial child collections.
        product_id: Fixed id (seeding); a new uuid is generated otherwise.
        now: Creation time override; defaults to the current UTC time.

    Raises:
        ValidationError: If any field rule fails. Nothing is written.
        StoreError: If persistence fails. The unit is rolled back.
    """
    check_product_fields(data.model_dump(), required=True)

    # A new product owns no child rows yet, so every child gets a fresh id.
    errors: list[dict[str, str]] = []
    children = {
        kind: _claim_child_ids(kind, getattr(data, kind), set(), errors) for kind in ID_COLLECTIONS
    }
    if errors:
        raise ValidationError(errors)

    now = now or datetime.now(timezone.utc)
    status = ProductStatus(data.status)
    document = ProductDocument(
        **data.model_dump(exclude=set(ID_COLLECTIONS)),
        **children,
        id=product_id or generate_id(),
        created_at=now,
        published_at=now if status is ProductStatus.ACTIVE else None,
    )
    record = to_write_set(document)

    await store.insert(record)
    await store.commit()
    logger.info(f"[catalog] created product id={document.id} status={status.value}")

    return await _reload(store, document.id)


async def update_product(
    store: ProductRecordStore,
    product_id: str,
    data: ProductUpdate,
    *,
    now: datetime | None = None,
) -> ProductDocument:
    """Apply a partial update and return the stored document.

    Only fields present in `data` change. Scalars overwrite; a present child
    collection replaces the stored one. Child ids the product does not own are
    replaced with fresh ones, and an id repeated within one collection is an
    error. Moving into "active" sets published_at when it was never set.

    Raises:
        NotFoundError: Unknown id.
        ValidationError: A supplied field breaks a field rule.
        StoreError: Persistence failed. The unit is rolled back.
    """
    current = await get_product(store, product_id)
    if current is None:
        raise NotFoundError(product_id)

    check_product_fields(data.model_dump(include=data.model_fields_set), required=False)

    changes: dict[str, Any] = {name: getattr(data, name) for name in data.model_fields_set}
    for kind in CHILD_COLLECTIONS:
        if kind in changes and changes[kind] is None:
            changes[kind] = []

    errors: list[dict[str, str]] = []
    for kind in ID_COLLECTIONS:
        if kind in changes:
            owned = {child.id for child in getattr(current, kind) if child.id}
            changes[kind] = _claim_child_ids(kind, changes[kind], owned, errors)
    if errors:
        raise ValidationError(errors)

    if changes.get("status") is not None:
        changes["status"] = ProductStatus(changes["status"])
    elif "status" in changes:
        raise ValidationError.for_field("status", "Status must be one of: active, draft, archived")

    if changes.get("status") is ProductStatus.ACTIVE and current.published_at is None:
        changes["published_at"] = now or datetime.now(timezone.utc)

    updated = current.model_copy(update=changes)
    record = to_write_set(updated)

    scalars = {name: value for name, value in changes.items() if name not in CHILD_COLLECTIONS}
    if "status" in scalars:
        scalars["status"] = scalars["status"].value
    if scalars:
        await store.update_fields(product_id, scalars)
    for kind in CHILD_COLLECTIONS:
        if kind in changes:
            await store.replace_children(product_id, kind, getattr(record, kind))

    await store.commit()
    logger.info(f"[catalog] updated product id={product_id} fields={sorted(changes)}")

    return await _reload(store, product_id)


async def delete_product(store: ProductRecordStore, product_id: str) -> bool:
    """Delete a product and its children. False when the id was unknown."""
    deleted = await store.delete(product_id)
    if not deleted:
        return False
    await store.commit()
    logger.info(f"[catalog] deleted product id={product_id}")
    return True


# ============================================================
# Field rules
# ============================================================


def check_product_fields(fields: dict[str, Any], *, required: bool) -> None:
    """Check product fields against the shared rules.

    Args:
        fields: Field values in document shape (children as plain dicts).
        required: If True, missing title/body_html/vendor/variants are errors
            (create). If False, only supplied fields are checked (update).

    Raises:
        ValidationError: With one detail entry per failing field.
    """
    errors: list[dict[str, str]] = []

    def check(name: str) -> bool:
        return required or name in fields

    if check("title") and not _non_empty(fields.get("title")):
        errors.append({"field": "title", "message": "Title is required"})

    if check("vendor") and not _non_empty(fields.get("vendor")):
        errors.append({"field": "vendor", "message": "Vendor is required"})

    if check("body_html"):
        body = fields.get("body_html") or ""
        if len(body) < MIN_DESCRIPTION_LENGTH:
            errors.append(
                {
                    "field": "body_html",
                    "message": f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters",
                }
            )

    if check("variants"):
        variants = fields.get("variants") or []
        if not variants:
            errors.append({"field": "variants", "message": "At least one variant is required"})
        for i, variant in enumerate(variants):
            field = f"variants.{i}.price"
            try:
                raw = variant.get("price") if isinstance(variant, dict) else None
                price = parse_decimal(raw, field=field)
            except ValidationError as e:
                errors.extend(e.details)
                continue
            if price <= 0:
                errors.append({"field": field, "message": "Price must be greater than 0"})

    if errors:
        raise ValidationError(errors)


def _claim_child_ids(
    kind: str,
    items: list[Any],
    owned_ids: set[str],
    errors: list[dict[str, str]],
) -> list[Any]:
    """Keep child ids the product already owns and clear the rest.

    Duplicate ids are reported in `errors` as `{kind}.{i}.id`.
    """
    seen: set[str] = set()
    claimed = []
    for i, item in enumerate(items):
        if item.id is None:
            claimed.append(item)
            continue
        if item.id in seen:
            errors.append({"field": f"{kind}.{i}.id", "message": "Duplicate id"})
            continue
        seen.add(item.id)
        claimed.append(item if item.id in owned_ids else item.model_copy(update={"id": None}))
    return claimed


async def _reload(store: ProductRecordStore, product_id: str) -> ProductDocument:
    document = await get_product(store, product_id)
    if document is None:
        raise NotFoundError(product_id)
    return document


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
