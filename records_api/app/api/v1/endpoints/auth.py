"""
Login endpoint for API v1.

A successful login only confirms the credentials; no token or session
is issued.  Unknown usernames and wrong passwords receive the same 401
response.
"""

from fastapi import APIRouter, Depends

from records_api.app.core.db import RecordStore, get_store
from records_api.app.core.errors import AuthRejectedError
from records_api.app.schemas.auth import LoginRequest, LoginResponse
from records_api.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    store: RecordStore = Depends(get_store),
) -> LoginResponse:
    """Check a username and password."""
    if not await AuthService(store).verify(credentials.username, credentials.password):
        raise AuthRejectedError()
    return LoginResponse()
