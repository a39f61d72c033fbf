"""API routes."""

from fastapi import APIRouter

from catalog.routes import products, tags

api_router = APIRouter()

# Product CRUD + search/filter
api_router.include_router(products.router, prefix="/products", tags=["products"])

# Tag listing
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
