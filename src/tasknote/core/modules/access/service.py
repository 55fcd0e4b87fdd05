from typing import NoReturn

import structlog

from tasknote.core.core import Service
from tasknote.core.modules.token.issuer import InvalidTokenError
from tasknote.core.modules.token.models import CallerIdentity
from tasknote.errors import AuthenticationError

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "Bearer"


class AccessService(Service):
    """Authorization gate: turns a raw Authorization header into a verified caller."""

    def authenticate(self, authorization: str | None) -> CallerIdentity:
        """Verify the `Bearer <token>` header and return the caller identity.

        Every rejection raises the same AuthenticationError; the specific
        reason is only logged.
        """
        if not authorization:
            self._reject("missing_authorization_header")

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != BEARER_SCHEME:
            self._reject("malformed_authorization_header")

        try:
            caller = self.core.tokens.verify(parts[1])
        except InvalidTokenError as e:
            self._reject("invalid_token", detail=e.reason)

        logger.debug("authorization_granted", user_id=caller.id)
        return caller

    def _reject(self, reason: str, **context: str) -> NoReturn:
        logger.warning("authorization_rejected", reason=reason, **context)
        raise AuthenticationError
