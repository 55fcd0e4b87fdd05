import re

from tasknote.errors import ValidationError

EMAIL_RE = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


def normalize_email(email: str) -> str:
    """Normalize and validate an email address.

    Emails are compared case-insensitively, so the normalized form is
    stripped and lowercased.

    Raises:
        ValidationError: If the email is not well-formed
    """
    normalized = email.strip().lower()
    if not EMAIL_RE.fullmatch(normalized):
        raise ValidationError("Invalid email format")
    return normalized


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Minimum length of 6 characters
    - At most 72 bytes when UTF-8 encoded

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
