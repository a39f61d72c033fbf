#!/usr/bin/env python3
"""Seed database with the sample products.

Creates (when missing):
- Leather Messenger Bag (active)
- Ceramic Coffee Mug (active)
- Wireless Headphones (draft)

The seed is idempotent: products are inserted under fixed ids and skipped
when the id already exists.

Usage:
    python scripts/seed.py
    CREATE_TABLES=true python scripts/seed.py
"""

import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from catalog.services.seed import seed_sample_products
from catalog.settings import get_settings
from catalog.stores.database import Database
from catalog.stores.products import ProductRecordStore

load_dotenv()


async def seed_database() -> None:
    """Seed database with initial data."""
    settings = get_settings()
    db = Database(settings.async_database_url)
    try:
        if settings.create_tables:
            print("Creating tables...")
            await db.create_tables()

        print("Seeding products...")
        async with db.session() as session:
            created = await seed_sample_products(ProductRecordStore(session))

        for product_id in created:
            print(f"  + {product_id}")
        print(f"Done: {len(created)} product(s) created")
    finally:
        await db.close()


if __name__ == "__main__":
    asyncio.run(seed_database())
