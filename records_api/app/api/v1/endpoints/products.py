"""
Product (inventory) endpoints for API v1.

Same shape as the customer endpoints, except that search matches the
inventory code exactly and listing defaults to the newest entry date
first.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from records_api.app.core.db import RecordStore, get_store
from records_api.app.schemas.common import CreatedResponse, DeletedResponse
from records_api.app.schemas.product import ProductCreate, ProductRead
from records_api.app.services.record_service import RecordService

router = APIRouter()

COLLECTION = "products"


@router.post("", response_model=CreatedResponse)
async def create_product(
    product: ProductCreate,
    store: RecordStore = Depends(get_store),
) -> CreatedResponse:
    """Register a product and return its id."""
    record_id = await RecordService(store).create(COLLECTION, product.model_dump())
    return CreatedResponse(id=record_id, message="Product registered successfully!")


@router.get("", response_model=List[ProductRead])
async def list_products(
    sort: Optional[str] = Query(None, description="Field to sort by (default: entry_date, newest first)"),
    direction: Optional[str] = Query(None, description="asc or desc"),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    return await RecordService(store).list(COLLECTION, sort, direction)


@router.get("/search", response_model=List[ProductRead])
async def search_products(
    code: Optional[str] = Query(None, description="Exact inventory code"),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    return await RecordService(store).search(COLLECTION, code)


@router.delete("/{product_id}", response_model=DeletedResponse)
async def delete_product(
    product_id: int,
    store: RecordStore = Depends(get_store),
) -> DeletedResponse:
    changes = await RecordService(store).delete(COLLECTION, product_id)
    return DeletedResponse(message="Product deleted successfully!", changes=changes)
