"""Shared fixtures: an in-memory SQLite database per test."""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from catalog.main import app
from catalog.schemas import ImageDocument, OptionDocument, ProductInput, ProductStatus, VariantDocument
from catalog.stores.database import Database
from catalog.stores.products import ProductRecordStore

LONG_DESCRIPTION = (
    "Handmade ceramic mug with a beautiful glazed finish. Holds 12oz of your favorite beverage."
)


@pytest.fixture
async def db():
    """Fresh in-memory database with all tables."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.create_tables()
    yield database
    await database.close()


@pytest.fixture
async def store(db: Database):
    """Record store bound to one session."""
    async with db.session() as session:
        yield ProductRecordStore(session)


@pytest.fixture
async def client(db: Database):
    """Create test client backed by the test database."""
    app.state.db = db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


def make_input(
    title: str = "Ceramic Coffee Mug",
    *,
    tags: list[str] | None = None,
    status: ProductStatus = ProductStatus.ACTIVE,
    price: str = "24.99",
) -> ProductInput:
    """Valid product input with one variant, one image and one option."""
    return ProductInput(
        title=title,
        body_html=LONG_DESCRIPTION,
        vendor="Home Ceramics",
        product_type="Kitchen",
        status=status,
        tags=["ceramic", "mug", "kitchen"] if tags is None else tags,
        images=[ImageDocument(src="https://example.com/mug.jpg", alt="Mug")],
        options=[OptionDocument(name="Size", values=["S", "M", "L"])],
        variants=[VariantDocument(title="White", price=Decimal(price), sku="MUG-001", inventory_quantity=25)],
    )
