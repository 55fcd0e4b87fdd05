"""Tests for user input validators."""

import pytest

from tasknote.core.modules.user.validators import normalize_email, validate_password
from tasknote.errors import ValidationError


class TestNormalizeEmail:
    """Tests for email normalization."""

    def test_lowercases_and_strips(self):
        """Test that emails are stripped and lowercased."""
        assert normalize_email("  Alice@Example.COM ") == "alice@example.com"

    @pytest.mark.parametrize("email", ["", "alice", "alice@", "@example.com", "alice@example", "a b@example.com"])
    def test_malformed_rejected(self, email):
        """Test that malformed emails raise ValidationError."""
        with pytest.raises(ValidationError, match="Invalid email"):
            normalize_email(email)


class TestValidatePassword:
    """Tests for password validation."""

    def test_six_characters_accepted(self):
        """Test that the minimum length is accepted."""
        validate_password("secret")

    def test_short_password_rejected(self):
        """Test that passwords under 6 characters raise ValidationError."""
        with pytest.raises(ValidationError, match="at least 6"):
            validate_password("abc12")

    def test_overlong_password_rejected(self):
        """Test that passwords beyond bcrypt's input limit raise ValidationError."""
        with pytest.raises(ValidationError, match="at most 72"):
            validate_password("x" * 73)
