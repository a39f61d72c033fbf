"""Tag endpoints.

GET /tags - distinct tag names across all products, alphabetically.
"""

from fastapi import APIRouter, Depends

from catalog.dependencies import get_store
from catalog.schemas import TagListResponse
from catalog.services import products as product_service
from catalog.stores.products import ProductRecordStore

router = APIRouter()


@router.get("", response_model=TagListResponse)
async def list_tags(store: ProductRecordStore = Depends(get_store)) -> TagListResponse:
    return TagListResponse(tags=await product_service.list_tags(store))
