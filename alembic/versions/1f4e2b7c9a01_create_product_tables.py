"""create_product_tables

Revision ID: 1f4e2b7c9a01
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1f4e2b7c9a01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "Product",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("body_html", sa.Text(), nullable=True),
        sa.Column("vendor", sa.String(length=255), nullable=True),
        sa.Column("product_type", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("handle", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_Product_created_at"), "Product", ["created_at"], unique=False)
    op.create_index(op.f("ix_Product_status"), "Product", ["status"], unique=False)

    op.create_table(
        "ProductVariant",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("product_id", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("compare_at_price", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("sku", sa.String(length=100), nullable=True),
        sa.Column("inventory_quantity", sa.Integer(), nullable=False),
        sa.Column("requires_shipping", sa.Boolean(), nullable=False),
        sa.Column("taxable", sa.Boolean(), nullable=False),
        sa.Column("option_values", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["Product.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ProductVariant_product_id"), "ProductVariant", ["product_id"], unique=False)

    op.create_table(
        "ProductImage",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("product_id", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("src", sa.Text(), nullable=False),
        sa.Column("alt", sa.String(length=500), nullable=True),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["product_id"], ["Product.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ProductImage_product_id"), "ProductImage", ["product_id"], unique=False)

    op.create_table(
        "ProductOption",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("product_id", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("values", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["Product.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ProductOption_product_id"), "ProductOption", ["product_id"], unique=False)

    op.create_table(
        "ProductTag",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["Product.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_id", "name", name="uq_product_tag_product_name"),
    )
    op.create_index(op.f("ix_ProductTag_product_id"), "ProductTag", ["product_id"], unique=False)
    op.create_index(op.f("ix_ProductTag_name"), "ProductTag", ["name"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_ProductTag_name"), table_name="ProductTag")
    op.drop_index(op.f("ix_ProductTag_product_id"), table_name="ProductTag")
    op.drop_table("ProductTag")
    op.drop_index(op.f("ix_ProductOption_product_id"), table_name="ProductOption")
    op.drop_table("ProductOption")
    op.drop_index(op.f("ix_ProductImage_product_id"), table_name="ProductImage")
    op.drop_table("ProductImage")
    op.drop_index(op.f("ix_ProductVariant_product_id"), table_name="ProductVariant")
    op.drop_table("ProductVariant")
    op.drop_index(op.f("ix_Product_status"), table_name="Product")
    op.drop_index(op.f("ix_Product_created_at"), table_name="Product")
    op.drop_table("Product")
