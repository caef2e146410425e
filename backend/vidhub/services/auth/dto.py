# vidhub/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from vidhub.services.identity.dto import IdentityOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    At least one of ``username`` / ``email`` must be given.

    :param password: Raw password (to be verified).
    :param username: Handle, matched case-insensitively.
    :param email: Email, matched case-insensitively.
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT (cookie or header).
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param user_id: Authenticated identity whose session ends.
    :param access_token: The presented access token; denylisted until expiry.
    """

    user_id: int
    access_token: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class SessionOut:
    """Identity plus the token pair issued for it."""

    user: IdentityOut
    tokens: TokenPairOut
