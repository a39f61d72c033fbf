"""Tests for the product and tag HTTP endpoints."""

import pytest
from httpx import AsyncClient

from catalog.schemas import ProductStatus
from catalog.services import products as product_service
from catalog.services.seed import seed_sample_products
from catalog.stores.database import Database
from catalog.stores.products import ProductRecordStore

from conftest import LONG_DESCRIPTION, make_input


def _form(**overrides) -> dict:
    payload = {
        "title": "Ceramic Coffee Mug",
        "body_html": LONG_DESCRIPTION,
        "vendor": "Home Ceramics",
        "product_type": "Kitchen",
        "tags": "ceramic, mug, kitchen",
        "image_url": "https://example.com/mug.jpg",
        "status": "active",
        "option_name": "Size",
        "option_values": "S, M, L",
        "price": "24.50",
        "sku": "MUG-001",
        "inventory": "25",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def seeded(db: Database) -> None:
    async with db.session() as session:
        await seed_sample_products(ProductRecordStore(session))


@pytest.mark.asyncio
async def test_create_product_from_form(client: AsyncClient):
    response = await client.post("/products", json=_form())
    assert response.status_code == 201
    product = response.json()["product"]

    assert product["id"]
    assert product["title"] == "Ceramic Coffee Mug"
    assert sorted(product["tags"]) == ["ceramic", "kitchen", "mug"]
    assert product["images"][0]["src"] == "https://example.com/mug.jpg"
    assert product["options"][0] == {"id": product["options"][0]["id"], "name": "Size", "values": ["S", "M", "L"]}
    assert product["variants"][0]["title"] == "Default"
    assert product["variants"][0]["price"] == 24.5
    assert product["variants"][0]["inventory_quantity"] == 25
    assert product["published_at"] is not None

    fetched = await client.get(f"/products/{product['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == {"product": product}


@pytest.mark.asyncio
async def test_create_draft_has_no_published_at(client: AsyncClient):
    response = await client.post("/products", json=_form(status="draft"))
    assert response.status_code == 201
    assert response.json()["product"]["published_at"] is None


@pytest.mark.asyncio
async def test_create_validation_failure(client: AsyncClient):
    response = await client.post("/products", json=_form(body_html="Too short", price="0"))
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert {d["field"] for d in body["details"]} == {"body_html", "price"}

    listing = await client.get("/products")
    assert listing.json() == {"products": []}


@pytest.mark.asyncio
async def test_create_rejects_non_object_body(client: AsyncClient):
    response = await client.post("/products", json=["not", "a", "form"])
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


@pytest.mark.asyncio
async def test_list_search_and_tag(client: AsyncClient, seeded: None):
    all_products = (await client.get("/products")).json()["products"]
    assert len(all_products) == 3

    mugs = (await client.get("/products", params={"search": "MUG"})).json()["products"]
    assert [p["title"] for p in mugs] == ["Ceramic Coffee Mug"]

    leather = (await client.get("/products", params={"tag": "Leather"})).json()["products"]
    assert [p["title"] for p in leather] == ["Leather Messenger Bag"]

    # search wins over tag
    both = (await client.get("/products", params={"search": "headphones", "tag": "leather"})).json()
    assert [p["title"] for p in both["products"]] == ["Wireless Headphones"]


@pytest.mark.asyncio
async def test_get_unknown_product(client: AsyncClient):
    response = await client.get("/products/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


@pytest.mark.asyncio
async def test_update_product(client: AsyncClient, seeded: None):
    response = await client.put(
        "/products/product-3",
        json={"status": "active", "tags": ["audio", "sale"], "variants": [{"title": "Black", "price": "179.99"}]},
    )
    assert response.status_code == 200
    product = response.json()["product"]
    assert product["status"] == "active"
    assert product["published_at"] is not None
    assert sorted(product["tags"]) == ["audio", "sale"]
    assert product["variants"][0]["price"] == 179.99
    # untouched fields survive
    assert product["title"] == "Wireless Headphones"
    assert product["vendor"] == "Tech Audio"
    assert len(product["images"]) == 1


@pytest.mark.asyncio
async def test_update_unknown_product(client: AsyncClient):
    response = await client.put("/products/nope", json={"title": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


@pytest.mark.asyncio
async def test_update_rejects_malformed_price(client: AsyncClient, seeded: None):
    response = await client.put("/products/product-1", json={"variants": [{"price": "abc"}]})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["field"] == "variants.0.price"


@pytest.mark.asyncio
async def test_update_rejects_short_description(client: AsyncClient, seeded: None):
    response = await client.put("/products/product-1", json={"body_html": "short"})
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["body_html"]


@pytest.mark.asyncio
async def test_delete_product(client: AsyncClient, seeded: None):
    response = await client.delete("/products/product-2")
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted"}

    assert (await client.get("/products/product-2")).status_code == 404
    again = await client.delete("/products/product-2")
    assert again.status_code == 404
    assert again.json() == {"error": "Product not found"}


@pytest.mark.asyncio
async def test_list_tags(client: AsyncClient, db: Database):
    async with db.session() as session:
        store = ProductRecordStore(session)
        await product_service.create_product(store, make_input("A", tags=["mug", "kitchen"]))
        await product_service.create_product(
            store, make_input("B", tags=["bag", "mug"], status=ProductStatus.DRAFT)
        )

    response = await client.get("/tags")
    assert response.status_code == 200
    assert response.json() == {"tags": ["bag", "kitchen", "mug"]}


@pytest.mark.asyncio
async def test_create_rejects_price_beyond_storage_range(client: AsyncClient):
    response = await client.post("/products", json=_form(price="1e100"))
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["price"]


@pytest.mark.asyncio
async def test_create_rejects_price_rounding_to_zero(client: AsyncClient):
    response = await client.post("/products", json=_form(price="0.001"))
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["price"]


@pytest.mark.asyncio
async def test_create_rejects_inventory_with_underscore(client: AsyncClient):
    response = await client.post("/products", json=_form(inventory="1_000"))
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["inventory"]


@pytest.mark.asyncio
async def test_update_rejects_price_beyond_storage_range(client: AsyncClient, seeded: None):
    response = await client.put("/products/product-1", json={"variants": [{"price": "1e100"}]})
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["variants.0.price"]


@pytest.mark.asyncio
async def test_update_with_another_products_variant_id(client: AsyncClient, seeded: None):
    other = (await client.get("/products/product-2")).json()["product"]
    foreign = other["variants"][0]["id"]

    response = await client.put(
        "/products/product-1",
        json={"variants": [{"id": foreign, "title": "Brown", "price": "149.99"}]},
    )
    assert response.status_code == 200
    assert response.json()["product"]["variants"][0]["id"] != foreign
    assert (await client.get("/products/product-2")).json()["product"] == other


@pytest.mark.asyncio
async def test_update_with_duplicate_variant_ids(client: AsyncClient, seeded: None):
    response = await client.put(
        "/products/product-1",
        json={"variants": [{"id": "x", "price": "10"}, {"id": "x", "price": "12"}]},
    )
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["variants.1.id"]


@pytest.mark.asyncio
async def test_variant_option_values_over_http(client: AsyncClient, seeded: None):
    response = await client.put(
        "/products/product-1",
        json={"variants": [{"title": "Brown", "price": "149.99", "option_values": ["Brown"]}]},
    )
    assert response.status_code == 200
    assert response.json()["product"]["variants"][0]["option_values"] == ["Brown"]
