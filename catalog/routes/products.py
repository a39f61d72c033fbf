"""Product endpoints.

GET    /products          - list, or ?search= (title) / ?tag= (search wins)
GET    /products/{id}     - one product
POST   /products          - create from the admin form shape
PUT    /products/{id}     - partial update in document shape
DELETE /products/{id}     - delete with children

Routers are thin: validation and persistence live in services.
Error bodies are produced by the exception handlers in catalog.main.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from catalog.dependencies import get_store
from catalog.errors import NotFoundError, StoreError
from catalog.schemas import (
    ErrorResponse,
    MessageResponse,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from catalog.services import products as product_service
from catalog.services.validation import parse_product_form
from catalog.stores.products import ProductRecordStore

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: str | None = Query(default=None, description="Case-insensitive title substring"),
    tag: str | None = Query(default=None, description="Case-insensitive exact tag"),
    store: ProductRecordStore = Depends(get_store),
) -> ProductListResponse:
    """List products, newest first. `search` takes precedence over `tag`."""
    if search:
        products = await product_service.search_products(store, search)
    elif tag:
        products = await product_service.filter_by_tag(store, tag)
    else:
        products = await product_service.list_products(store)
    return ProductListResponse(products=products)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    store: ProductRecordStore = Depends(get_store),
) -> ProductResponse:
    product = await product_service.get_product(store, product_id)
    if product is None:
        raise NotFoundError(product_id)
    return ProductResponse(product=product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: dict[str, Any] = Body(...),
    store: ProductRecordStore = Depends(get_store),
) -> ProductResponse:
    """Create a product from the flat admin form.

    Returns:
        201 with the stored product. 400 with field details on invalid input.
    """
    form = parse_product_form(payload)
    try:
        product = await product_service.create_product(store, form.to_input())
    except StoreError as e:
        raise StoreError("Failed to create product") from e
    return ProductResponse(product=product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    store: ProductRecordStore = Depends(get_store),
) -> ProductResponse:
    """Apply a partial update. Present child collections replace stored ones."""
    try:
        product = await product_service.update_product(store, product_id, data)
    except StoreError as e:
        raise StoreError("Failed to update product") from e
    return ProductResponse(product=product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    store: ProductRecordStore = Depends(get_store),
) -> MessageResponse:
    if not await product_service.delete_product(store, product_id):
        raise NotFoundError(product_id)
    return MessageResponse(message="Product deleted")
