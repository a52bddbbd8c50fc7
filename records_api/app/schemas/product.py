"""
Pydantic models for inventory (product) records.

``quantity`` is the only numeric field; everything else, dates
included, is stored as the text the client sent.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    item: Optional[str] = Field(None, examples=["Router"])
    code: Optional[str] = Field(None, examples=["RT-100"], description="Inventory code, used by the search endpoint")
    quantity: Optional[int] = Field(None, examples=[3])
    serial_number: Optional[str] = None
    entry_date: Optional[str] = Field(None, examples=["2024-03-01"])
    exit_date: Optional[str] = None
    description: Optional[str] = None


class ProductCreate(ProductBase):
    """Schema for registering a product."""

    model_config = ConfigDict(extra="forbid")


class ProductRead(ProductBase):
    """Schema for reading a product from the API."""

    id: int
