"""
Customer endpoints for API v1.

Registration allocates the lowest reusable id and returns it; listing
and searching read straight from the store; deletion reports 404 when
the id does not exist.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from records_api.app.core.db import RecordStore, get_store
from records_api.app.schemas.common import CreatedResponse, DeletedResponse
from records_api.app.schemas.customer import CustomerCreate, CustomerRead
from records_api.app.services.record_service import RecordService

router = APIRouter()

COLLECTION = "customers"


@router.post("", response_model=CreatedResponse)
async def create_customer(
    customer: CustomerCreate,
    store: RecordStore = Depends(get_store),
) -> CreatedResponse:
    """Register a customer and return its id."""
    record_id = await RecordService(store).create(COLLECTION, customer.model_dump())
    return CreatedResponse(id=record_id, message="Customer registered successfully!")


@router.get("", response_model=List[CustomerRead])
async def list_customers(
    sort: Optional[str] = Query(None, description="Field to sort by (default: legal_name)"),
    direction: Optional[str] = Query(None, description="asc or desc"),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    """Return all customers, ordered by legal name unless told otherwise."""
    return await RecordService(store).list(COLLECTION, sort, direction)


@router.get("/search", response_model=List[CustomerRead])
async def search_customers(
    term: Optional[str] = Query(None, description="Substring of the legal name or tax id"),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    """Return customers whose legal name or tax id contains ``term``."""
    return await RecordService(store).search(COLLECTION, term)


@router.delete("/{customer_id}", response_model=DeletedResponse)
async def delete_customer(
    customer_id: int,
    store: RecordStore = Depends(get_store),
) -> DeletedResponse:
    """Delete a customer by id."""
    changes = await RecordService(store).delete(COLLECTION, customer_id)
    return DeletedResponse(
        message=f"Customer (ID: {customer_id}) deleted successfully!", changes=changes
    )
