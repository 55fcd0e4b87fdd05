from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pydantic
from jose import JWTError, jwt

from tasknote.core.modules.token.models import AuthToken, CallerIdentity, TokenClaims
from tasknote.utils import now


class InvalidTokenError(Exception):
    """Raised when a token fails verification. The reason is for server-side logs only."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class TokenIssuer:
    """Issues and verifies HMAC-signed, time-bounded identity tokens.

    Stateless: verification depends only on the signature and the expiry,
    never on stored sessions.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=24),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: UUID, email: str) -> AuthToken:
        """Sign a fresh claim set for the user."""
        issued_at = int(self._clock().timestamp())
        claims = TokenClaims(
            sub=user_id,
            email=email,
            iat=issued_at,
            exp=issued_at + int(self._ttl.total_seconds()),
            jti=uuid4(),
        )
        return AuthToken(jwt.encode(claims.model_dump(mode="json"), self._secret, algorithm=self._algorithm))

    def verify(self, token: str) -> CallerIdentity:
        """Verify signature, algorithm, claim shape and expiry.

        Raises:
            InvalidTokenError: If any check fails
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise InvalidTokenError("malformed_token") from e

        if header.get("alg") != self._algorithm:
            raise InvalidTokenError("unexpected_algorithm")

        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm], options={"verify_exp": False})
        except JWTError as e:
            raise InvalidTokenError("decode_failed") from e

        try:
            claims = TokenClaims.model_validate(payload)
        except pydantic.ValidationError as e:
            raise InvalidTokenError("invalid_claims") from e

        if self._clock().timestamp() > claims.exp:
            raise InvalidTokenError("token_expired")

        return CallerIdentity(id=claims.sub, email=claims.email)
