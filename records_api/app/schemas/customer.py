"""
Pydantic models for customer records.

All data fields are optional: a field left out of the request body is
stored as ``NULL``.  Fields that are not part of the customer schema
are rejected with a validation error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerBase(BaseModel):
    legal_name: Optional[str] = Field(None, examples=["Acme Ltda"], description="Company or legal name")
    registration_date: Optional[str] = Field(None, examples=["2024-03-01"])
    tax_id: Optional[str] = Field(None, examples=["12.345.678/0001-90"], description="Tax identification number")
    full_name: Optional[str] = Field(None, examples=["Maria Souza"])
    address: Optional[str] = None
    neighborhood: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = Field(None, examples=["SP"])
    phone: Optional[str] = None


class CustomerCreate(CustomerBase):
    """Schema for registering a customer."""

    model_config = ConfigDict(extra="forbid")


class CustomerRead(CustomerBase):
    """Schema for reading a customer from the API."""

    id: int
