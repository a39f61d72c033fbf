"""FastAPI dependencies.

The Database handle lives on app.state (set by the lifespan, or by tests);
each request gets its own session and record store.
"""

from collections.abc import AsyncGenerator

from fastapi import Request

from catalog.stores.database import Database
from catalog.stores.products import ProductRecordStore


def get_database(request: Request) -> Database:
    db: Database | None = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized. Set app.state.db at startup.")
    return db


async def get_store(request: Request) -> AsyncGenerator[ProductRecordStore, None]:
    """Yield a product store bound to a request-scoped session."""
    async with get_database(request).session() as session:
        yield ProductRecordStore(session)
