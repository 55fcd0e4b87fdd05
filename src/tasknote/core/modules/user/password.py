"""Password hashing with bcrypt.

bcrypt is CPU-bound, so both operations run in a worker thread to keep the
event loop free for other requests.
"""

import asyncio

import bcrypt
import structlog

from tasknote.errors import InternalError

logger = structlog.get_logger(__name__)


async def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password with a fresh salt."""
    try:
        digest = await asyncio.to_thread(bcrypt.hashpw, password.encode("utf-8"), bcrypt.gensalt(rounds))
    except ValueError as e:
        logger.exception("password_hash_failed")
        raise InternalError("Failed to hash password") from e
    return digest.decode("utf-8")


async def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash (constant-time comparison)."""
    try:
        return await asyncio.to_thread(bcrypt.checkpw, password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("password_hash_unreadable")
        return False
