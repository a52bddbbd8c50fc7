"""
Password hashing helpers.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random 16-byte
salt.  The stored string embeds everything needed to verify it later::

    pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>

``verify_password`` re-derives the key with the embedded salt and
iteration count and compares digests with ``hmac.compare_digest``, so
the comparison time does not depend on how many bytes match.

Hashing is deliberately slow.  Request handlers must use the
``*_async`` variants, which run the derivation in a worker thread and
leave the event loop free for other requests.
"""

import asyncio
import hashlib
import hmac
import os
from typing import Optional

from .config import settings

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : Optional[int]
        Work factor.  Defaults to ``settings.password_hash_iterations``.

    Returns
    -------
    str
        The encoded hash (algorithm, iterations, salt and digest
        separated by ``$``).
    """
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(SALT_BYTES)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash string.

    Parameters
    ----------
    plain_password : str
        The password provided by the user.
    hashed_password : str
        A string produced by ``hash_password``.

    Returns
    -------
    bool
        True if the password matches.  A malformed stored hash or a
        password that cannot be encoded as UTF-8 never matches.
    """
    try:
        algorithm, iterations, salt_hex, hash_hex = hashed_password.split("$")
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        rounds = int(iterations)
        if algorithm != ALGORITHM or rounds < 1:
            return False
        # UnicodeEncodeError (a ValueError) covers passwords with lone surrogates.
        dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(dk, stored_hash)


async def hash_password_async(password: str, iterations: Optional[int] = None) -> str:
    """Run ``hash_password`` in a worker thread."""
    return await asyncio.to_thread(hash_password, password, iterations)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Run ``verify_password`` in a worker thread."""
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)
