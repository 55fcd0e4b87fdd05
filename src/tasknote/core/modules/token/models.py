"""Identity token models."""

from typing import NewType
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from tasknote.core.modules.user.models import UserView

AuthToken = NewType("AuthToken", str)


class TokenClaims(BaseModel):
    """Claim set carried by a signed identity token.

    Decoded payloads must match this shape exactly: every claim present,
    no extra keys.
    """

    sub: UUID  # subject (user) id
    email: StrictStr
    iat: StrictInt  # issued at, epoch seconds
    exp: StrictInt  # expires at, epoch seconds
    jti: UUID  # per-token nonce

    model_config = ConfigDict(extra="forbid", frozen=True)


class CallerIdentity(BaseModel):
    """Verified caller attached to a request after token verification."""

    id: UUID
    email: str

    model_config = ConfigDict(frozen=True)


class AuthResult(BaseModel):
    """Token issued on registration or login, with the user it identifies."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    user: UserView = Field(..., description="Authenticated user")
