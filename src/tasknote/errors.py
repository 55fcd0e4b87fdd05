from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found or not owned by the caller."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthorizationError(NotFoundError):
    """Raised when a resource exists but belongs to another user.

    Reported to the client exactly like NotFoundError so that resource
    existence is never confirmed to other tenants.
    """

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConflictError(UserError):
    """Raised when a create would violate a uniqueness constraint."""


class InternalError(Exception):
    """Raised on hashing, storage or transaction failures. Never shown to the user."""
