"""Credential policies: password strength and handle/email shape."""

from __future__ import annotations

from marshmallow import ValidationError as MarshmallowValidationError
from marshmallow import validate

from vidhub.services._shared.errors import ValidationError

PASSWORD_MIN_LENGTH = 8
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 100

_email_validator = validate.Email()


def check_password_strength(password: str) -> None:
    """
    Enforce the minimum-strength policy.

    At least eight characters with one lowercase letter, one uppercase
    letter, one digit and one symbol.

    :raises ValidationError: When the password is too weak.
    """
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    missing = [
        label
        for label, ok in (
            ("a lowercase letter", any(c.islower() for c in password)),
            ("an uppercase letter", any(c.isupper() for c in password)),
            ("a digit", any(c.isdigit() for c in password)),
            ("a symbol", any(not c.isalnum() and not c.isspace() for c in password)),
        )
        if not ok
    ]
    if missing:
        raise ValidationError("Password must contain " + ", ".join(missing))


def normalize_username(username: str | None) -> str:
    """Trim and lowercase a handle, enforcing its length bounds."""
    value = (username or "").strip().lower()
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )
    return value


def normalize_email(email: str | None) -> str:
    """Trim and lowercase an email address, rejecting malformed ones."""
    value = (email or "").strip().lower()
    try:
        _email_validator(value)
    except MarshmallowValidationError as exc:
        raise ValidationError("Email address is invalid") from exc
    return value
