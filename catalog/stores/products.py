"""Product record store.

Durable storage of products keyed by id, over one AsyncSession:
- insert: product + all child rows in one unit
- get / scan / search_title / with_tag: eager-loaded reads, newest first
- update_fields / replace_children: scalar overwrite, delete-then-recreate children
- delete: cascades to children

Callers get ProductRecord projections, never ORM objects. Writes are flushed
but only made durable by commit(); any SQLAlchemy failure rolls the unit back
and surfaces as StoreError.
"""

from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
import logging
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog.errors import StoreError
from catalog.models import Product, ProductImage, ProductOption, ProductTag, ProductVariant
from catalog.stores.records import (
    CHILD_COLLECTIONS,
    ImageRow,
    OptionRow,
    ProductRecord,
    ProductRow,
    TagRow,
    VariantRow,
)

logger = logging.getLogger("uvicorn.error")

# Scalar columns a product update may overwrite. id and created_at are immutable.
UPDATABLE_FIELDS = frozenset(
    {"title", "body_html", "vendor", "product_type", "status", "handle", "published_at"}
)


class ProductRecordStore:
    """Relational store for products and their child collections."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ============================================================
    # Reads
    # ============================================================

    async def get(self, product_id: str) -> ProductRecord | None:
        """Point lookup. Returns None when the id is unknown."""
        product = await self._load(product_id)
        return _to_record(product) if product else None

    async def scan(self) -> list[ProductRecord]:
        """All products, newest first."""
        return await self._fetch(_select_products())

    async def search_title(self, query: str) -> list[ProductRecord]:
        """Products whose title contains `query`, case-insensitive."""
        pattern = f"%{_escape_like(query)}%"
        return await self._fetch(
            _select_products().where(Product.title.ilike(pattern, escape="\\"))
        )

    async def with_tag(self, tag: str) -> list[ProductRecord]:
        """Products carrying `tag`, case-insensitive exact match."""
        return await self._fetch(
            _select_products().where(
                Product.tags.any(func.lower(ProductTag.name) == tag.lower())
            )
        )

    async def tag_names(self) -> list[str]:
        """Distinct tag names across all products, sorted."""
        async with self._guard("tag_names"):
            result = await self.session.execute(select(ProductTag.name).distinct())
            return sorted(result.scalars().all())

    # ============================================================
    # Writes
    # ============================================================

    async def insert(self, record: ProductRecord) -> None:
        """Add a product and all of its child rows."""
        p = record.product
        product = Product(
            id=p.id,
            title=p.title,
            body_html=p.body_html,
            vendor=p.vendor,
            product_type=p.product_type,
            status=p.status,
            handle=p.handle,
            created_at=p.created_at,
            published_at=p.published_at,
        )
        for kind in CHILD_COLLECTIONS:
            getattr(product, kind).extend(_child_models(kind, getattr(record, kind)))

        async with self._guard("insert"):
            self.session.add(product)
            await self.session.flush()

    async def update_fields(self, product_id: str, values: dict[str, Any]) -> bool:
        """Overwrite scalar columns. Returns False when the id is unknown."""
        unknown = set(values) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")

        product = await self._load(product_id)
        if product is None:
            return False

        async with self._guard("update_fields"):
            for name, value in values.items():
                setattr(product, name, value)
            await self.session.flush()
        return True

    async def replace_children(
        self,
        product_id: str,
        kind: str,
        rows: Iterable[VariantRow | ImageRow | OptionRow | TagRow],
    ) -> bool:
        """Delete every `kind` row of the product, then insert `rows`.

        Returns False when the id is unknown.
        """
        if kind not in CHILD_COLLECTIONS:
            raise ValueError(f"Unknown child collection: {kind}")

        product = await self._load(product_id)
        if product is None:
            return False

        async with self._guard("replace_children"):
            collection = getattr(product, kind)
            # Flush the deletes before inserting so replacement rows may reuse ids/names.
            collection.clear()
            await self.session.flush()
            collection.extend(_child_models(kind, rows))
            await self.session.flush()
        return True

    async def delete(self, product_id: str) -> bool:
        """Delete a product and its children. Returns False when the id is unknown."""
        product = await self._load(product_id)
        if product is None:
            return False

        async with self._guard("delete"):
            await self.session.delete(product)
            await self.session.flush()
        return True

    async def commit(self) -> None:
        """Make the current unit of work durable."""
        async with self._guard("commit"):
            await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    # ============================================================
    # Internals
    # ============================================================

    async def _load(self, product_id: str) -> Product | None:
        async with self._guard("load"):
            result = await self.session.execute(
                _select_products()
                .where(Product.id == product_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

    async def _fetch(self, stmt: Select) -> list[ProductRecord]:
        async with self._guard("fetch"):
            result = await self.session.execute(stmt.execution_options(populate_existing=True))
            return [_to_record(p) for p in result.scalars().all()]

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        """Roll back and raise StoreError on any database failure."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"[store] {operation} failed")
            raise StoreError(f"Product store {operation} failed") from e


def _select_products() -> Select:
    return (
        select(Product)
        .options(
            selectinload(Product.variants),
            selectinload(Product.images),
            selectinload(Product.options),
            selectinload(Product.tags),
        )
        .order_by(Product.created_at.desc(), Product.id.desc())
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_record(product: Product) -> ProductRecord:
    return ProductRecord(
        product=ProductRow(
            id=product.id,
            title=product.title,
            status=product.status,
            created_at=product.created_at,
            body_html=product.body_html,
            vendor=product.vendor,
            product_type=product.product_type,
            handle=product.handle,
            published_at=product.published_at,
        ),
        variants=[
            VariantRow(
                id=v.id,
                position=v.position,
                title=v.title,
                price=v.price,
                compare_at_price=v.compare_at_price,
                sku=v.sku,
                inventory_quantity=v.inventory_quantity,
                requires_shipping=v.requires_shipping,
                taxable=v.taxable,
                option_values=v.option_values or "",
            )
            for v in product.variants
        ],
        images=[
            ImageRow(id=i.id, position=i.position, src=i.src, alt=i.alt, width=i.width, height=i.height)
            for i in product.images
        ],
        options=[
            OptionRow(id=o.id, position=o.position, name=o.name, values=o.values)
            for o in product.options
        ],
        tags=[TagRow(name=t.name) for t in product.tags],
    )


def _child_models(kind: str, rows: Iterable[Any]) -> list[Any]:
    if kind == "variants":
        return [
            ProductVariant(
                id=r.id,
                position=r.position,
                title=r.title,
                price=r.price,
                compare_at_price=r.compare_at_price,
                sku=r.sku,
                inventory_quantity=r.inventory_quantity,
                requires_shipping=r.requires_shipping,
                taxable=r.taxable,
                option_values=r.option_values,
            )
            for r in rows
        ]
    if kind == "images":
        return [
            ProductImage(id=r.id, position=r.position, src=r.src, alt=r.alt, width=r.width, height=r.height)
            for r in rows
        ]
    if kind == "options":
        return [ProductOption(id=r.id, position=r.position, name=r.name, values=r.values) for r in rows]
    return [ProductTag(name=r.name) for r in rows]
