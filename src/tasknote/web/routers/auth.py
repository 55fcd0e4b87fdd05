from fastapi import APIRouter
from pydantic import BaseModel, Field

from tasknote.core.modules.token.models import AuthResult
from tasknote.web.deps import AppDep
from tasknote.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Registration request."""

    email: str = Field(..., description="Email address, compared case-insensitively")
    password: str = Field(..., description="Password, at least 6 characters")


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


@router.post(
    "/auth/register",
    summary="Register user",
    description="Create an account and receive an authentication token.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "User created"},
        400: {"model": ErrorResponse, "description": "Invalid email or password"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
)
async def register(request: RegisterRequest, app: AppDep) -> AuthResult:
    return await app.register(request.email, request.password)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(request: LoginRequest, app: AppDep) -> AuthResult:
    """Authenticate user and issue a token valid for 24 hours."""
    return await app.login(request.email, request.password)
