"""Pydantic models for the login endpoint."""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    # Both fields are optional at the schema level so that a missing
    # value is reported as 400 by the service instead of 422.
    username: Optional[str] = Field(None, examples=["admin"])
    password: Optional[str] = Field(None, examples=["1234"])


class LoginResponse(BaseModel):
    authenticated: bool = True
    message: str = "Login successful."
