"""
Error hierarchy for the records service.

Every failure the services raise derives from ``RecordsError`` and
carries the HTTP status and response body the API layer should
render.  Messages are safe to return to clients: store failures keep
the underlying driver error in ``__cause__`` and in the logs only.
"""

from typing import Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class RecordsError(Exception):
    """Base exception for all service failures."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    # Key under which the message is returned: failures use ``error``,
    # negative outcomes of a valid request (404, 401) use ``message``.
    body_key: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, str]:
        return {self.body_key: self.message}


class CredentialsMissingError(RecordsError):
    """Login attempted without a username or password."""

    http_status = status.HTTP_400_BAD_REQUEST
    code = "bad_request"

    def __init__(self, message: str = "Username and password are required.") -> None:
        super().__init__(message)


class StoreError(RecordsError):
    """The persistent store failed (connectivity, constraint, SQL)."""

    code = "store_error"

    def __init__(self, message: str = "Internal server error.", operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class InsertionError(StoreError):
    """A single-row insert was refused by the store."""

    code = "insertion_failed"

    def __init__(self, label: str) -> None:
        super().__init__(f"Failed to register the {label}.", operation="insert")
        self.label = label


class RecordNotFoundError(RecordsError):
    """Delete targeted an id that does not exist."""

    http_status = status.HTTP_404_NOT_FOUND
    code = "not_found"
    body_key = "message"

    def __init__(self, label: str, record_id: int) -> None:
        super().__init__(f"{label.capitalize()} not found.")
        self.record_id = record_id


class AuthRejectedError(RecordsError):
    """Unknown username or wrong password; the two are indistinguishable."""

    http_status = status.HTTP_401_UNAUTHORIZED
    code = "auth_rejected"
    body_key = "message"

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class UnknownCollectionError(ValueError):
    """Raised when a collection name is not in the registry."""


async def records_error_handler(request: Request, exc: RecordsError) -> JSONResponse:
    """Render a ``RecordsError`` as a JSON response."""
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())
