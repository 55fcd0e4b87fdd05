import secrets
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from tasknote.core.core import Service
from tasknote.core.modules.user.models import User
from tasknote.core.modules.user.password import hash_password, verify_password
from tasknote.core.modules.user.validators import normalize_email, validate_password
from tasknote.errors import AuthenticationError, ConflictError, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Credential store: user records keyed by unique, normalized email."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._dummy_hash: str | None = None

    async def on_start(self) -> None:
        """Create unique email index."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            raise NotFoundError("User not found")
        return User.model_validate(doc)

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by normalized email, or None."""
        doc = await self._collection.find_one({"email": email})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def create_user(self, email: str, password: str) -> User:
        """Create user with hashed password.

        Raises:
            ValidationError: If email or password are malformed
            ConflictError: If the email is already registered
        """
        email = normalize_email(email)
        validate_password(password)

        if await self.get_user_by_email(email) is not None:
            raise ConflictError("Email already exists")

        password_hash = await hash_password(password, self.core.config.bcrypt_rounds)
        user = User(email=email, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Concurrent registration with the same email, the unique index wins
            raise ConflictError("Email already exists") from e

        logger.info("user_created", user_id=user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Verify credentials and return the user.

        Unknown email and wrong password fail identically, and both cost one
        bcrypt comparison.
        """
        user = await self.get_user_by_email(email.strip().lower())
        if user is None:
            await verify_password(password, await self._get_dummy_hash())
            raise AuthenticationError("Invalid email or password")

        if not await verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return user

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await hash_password(secrets.token_urlsafe(16), self.core.config.bcrypt_rounds)
        return self._dummy_hash
