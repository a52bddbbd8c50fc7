"""Response bodies shared by the record endpoints."""

from pydantic import BaseModel


class CreatedResponse(BaseModel):
    id: int
    message: str


class DeletedResponse(BaseModel):
    message: str
    changes: int
