"""
Business logic for accounts and login.

``AuthService`` checks a username and password against the salted
hashes in the ``accounts`` table and, on process start, makes sure the
default administrator account exists.  An unknown username and a
wrong password produce the same ``False`` result so callers cannot
tell which accounts exist.
"""

import logging
from typing import Optional

from ..core.config import settings
from ..core.db import RecordStore
from ..core.errors import CredentialsMissingError, StoreError
from ..core.security import hash_password_async, verify_password_async

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account bootstrap and credential verification."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def bootstrap_default_account(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> bool:
        """Create the default account if it does not exist yet.

        Safe to run on every start: an existing account is left
        untouched, whatever its password.  Returns ``True`` when an
        account was created.
        """
        username = username or settings.default_admin_username
        password = password or settings.default_admin_password

        password_hash = await hash_password_async(password)
        row = await self.store.get("SELECT id FROM accounts WHERE username = ?", (username,))
        if row:
            logger.info("Default account '%s' already exists", username)
            return False
        await self.store.run(
            "INSERT INTO accounts (username, password_hash) VALUES (?, ?)",
            (username, password_hash),
        )
        logger.info("Default account '%s' created", username)
        return True

    async def verify(self, username: Optional[str], password: Optional[str]) -> bool:
        """Return ``True`` if ``password`` is the password of ``username``.

        Raises
        ------
        CredentialsMissingError
            If either value is missing or empty; the store is not
            queried in that case.
        StoreError
            If the account lookup fails.
        """
        if not username or not password:
            raise CredentialsMissingError()

        try:
            row = await self.store.get(
                "SELECT password_hash FROM accounts WHERE username = ?", (username,)
            )
        except StoreError:
            logger.error("Error looking up account '%s' during login", username)
            raise
        if not row:
            logger.info("Login rejected for '%s'", username)
            return False

        if await verify_password_async(password, row["password_hash"]):
            logger.info("Login succeeded for '%s'", username)
            return True
        logger.info("Login rejected for '%s'", username)
        return False
