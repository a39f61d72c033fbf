"""Sample catalog data.

seed_sample_products() is the explicit initialization step: it runs once at
startup (or from scripts/seed.py) and inserts each sample product under a
fixed id unless that id already exists, so running it again is a no-op.
"""

import logging
from decimal import Decimal

from catalog.schemas import ImageDocument, OptionDocument, ProductInput, ProductStatus, VariantDocument
from catalog.services.products import create_product
from catalog.stores.products import ProductRecordStore

logger = logging.getLogger("uvicorn.error")


SAMPLE_PRODUCTS: dict[str, ProductInput] = {
    "product-1": ProductInput(
        title="Leather Messenger Bag",
        body_html=(
            "A beautiful handcrafted leather messenger bag. Perfect for work or school. "
            "Features multiple pockets and adjustable strap."
        ),
        vendor="Artisan Bags",
        product_type="Bags",
        status=ProductStatus.ACTIVE,
        tags=["leather", "bag", "handmade"],
        variants=[
            VariantDocument(
                title="Brown",
                price=Decimal("149.99"),
                compare_at_price=Decimal("199.99"),
                sku="BAG-001",
                inventory_quantity=10,
            )
        ],
        options=[OptionDocument(name="Color", values=["Brown", "Black", "Tan"])],
        images=[
            ImageDocument(
                src="https://images.unsplash.com/photo-1548036328-c9fa89d128fa?w=800",
                alt="Leather bag front",
            ),
            ImageDocument(
                src="https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=800",
                alt="Leather bag side",
            ),
            ImageDocument(
                src="https://images.unsplash.com/photo-1547949003-9792a18a2601?w=800",
                alt="Leather bag detail",
            ),
        ],
    ),
    "product-2": ProductInput(
        title="Ceramic Coffee Mug",
        body_html=(
            "Handmade ceramic mug with a beautiful glazed finish. Holds 12oz of your "
            "favorite beverage. Dishwasher and microwave safe."
        ),
        vendor="Home Ceramics",
        product_type="Kitchen",
        status=ProductStatus.ACTIVE,
        tags=["ceramic", "mug", "kitchen"],
        variants=[
            VariantDocument(title="White", price=Decimal("24.99"), sku="MUG-001", inventory_quantity=25)
        ],
        images=[
            ImageDocument(
                src="https://images.unsplash.com/photo-1514228742587-6b1558fcca3d?w=800",
                alt="Ceramic mug",
            )
        ],
    ),
    "product-3": ProductInput(
        title="Wireless Headphones",
        body_html=(
            "Premium wireless headphones with noise cancellation. 20 hour battery life. "
            "Comfortable over-ear design for all day use."
        ),
        vendor="Tech Audio",
        product_type="Electronics",
        status=ProductStatus.DRAFT,
        tags=["audio", "wireless", "headphones"],
        variants=[
            VariantDocument(title="Black", price=Decimal("199.99"), sku="HP-001", inventory_quantity=0)
        ],
        images=[
            ImageDocument(
                src="https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=800",
                alt="Headphones",
            )
        ],
    ),
}


async def seed_sample_products(store: ProductRecordStore) -> list[str]:
    """Insert missing sample products.

    Returns:
        Ids of the products inserted by this call.
    """
    created: list[str] = []
    for product_id, data in SAMPLE_PRODUCTS.items():
        if await store.get(product_id) is not None:
            logger.info(f"[seed] {product_id} exists, skipping")
            continue
        await create_product(store, data, product_id=product_id)
        created.append(product_id)

    logger.info(f"[seed] done created={len(created)} total={len(SAMPLE_PRODUCTS)}")
    return created
