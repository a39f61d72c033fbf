"""Product model and its child collections.

A Product owns four child tables, each foreign-keyed to Product.id with
cascade delete:
- ProductVariant: purchasable configurations (at least one per product)
- ProductImage: gallery images
- ProductOption: option name + delimited values string ("S, M, L")
- ProductTag: free-form tag names

Child rows are never merged: updating a collection deletes the old rows and
inserts the new ones.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.stores.database import Base


def generate_id() -> str:
    """Generate opaque unique id."""
    return str(uuid4())


class Product(Base):
    """Catalog product."""

    __tablename__ = "Product"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_id)

    title: Mapped[str] = mapped_column(String(500))
    body_html: Mapped[str | None] = mapped_column(Text)
    vendor: Mapped[str | None] = mapped_column(String(255))
    product_type: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)  # active/draft/archived
    handle: Mapped[str | None] = mapped_column(String(255))

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Children (ordered by write position)
    variants: Mapped[list["ProductVariant"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductVariant.position",
    )
    images: Mapped[list["ProductImage"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.position",
    )
    options: Mapped[list["ProductOption"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductOption.position",
    )
    tags: Mapped[list["ProductTag"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductTag.id",
    )

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.title[:30]}>"


class ProductVariant(Base):
    """Purchasable variant of a product."""

    __tablename__ = "ProductVariant"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_id)
    product_id: Mapped[str] = mapped_column(ForeignKey("Product.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    title: Mapped[str | None] = mapped_column(String(255))
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    compare_at_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    sku: Mapped[str | None] = mapped_column(String(100))
    inventory_quantity: Mapped[int] = mapped_column(Integer, default=0)
    requires_shipping: Mapped[bool] = mapped_column(Boolean, default=True)
    taxable: Mapped[bool] = mapped_column(Boolean, default=True)
    option_values: Mapped[str] = mapped_column(Text, default="")  # "Brown, Large"

    product: Mapped[Product] = relationship(back_populates="variants")

    def __repr__(self) -> str:
        return f"<ProductVariant {self.id} {self.price}>"


class ProductImage(Base):
    __tablename__ = "ProductImage"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_id)
    product_id: Mapped[str] = mapped_column(ForeignKey("Product.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    src: Mapped[str] = mapped_column(Text)
    alt: Mapped[str | None] = mapped_column(String(500))
    width: Mapped[int | None] = mapped_column(Integer)
    height: Mapped[int | None] = mapped_column(Integer)

    product: Mapped[Product] = relationship(back_populates="images")


class ProductOption(Base):
    __tablename__ = "ProductOption"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_id)
    product_id: Mapped[str] = mapped_column(ForeignKey("Product.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    name: Mapped[str] = mapped_column(String(255))
    values: Mapped[str] = mapped_column(Text, default="")  # "Brown, Black, Tan"

    product: Mapped[Product] = relationship(back_populates="options")


class ProductTag(Base):
    __tablename__ = "ProductTag"
    __table_args__ = (UniqueConstraint("product_id", "name", name="uq_product_tag_product_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[str] = mapped_column(ForeignKey("Product.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255), index=True)

    product: Mapped[Product] = relationship(back_populates="tags")
