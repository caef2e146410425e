from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class TokenKind(str, Enum):
    """Kinds of signed tokens. The value is the JWT ``type`` claim."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenSubject(Protocol):
    """Anything a token can be issued for (ORM ``User`` or an identity DTO)."""

    id: int
    email: str
    username: str
    full_name: str


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """
    Verified payload of an access token.

    :ivar identity_id: User id (JWT ``sub``).
    :ivar email: Email at issuance time.
    :ivar username: Handle at issuance time.
    :ivar full_name: Display name at issuance time.
    :ivar token_id: Random ``jti`` used by the denylist.
    :ivar issued_at: ``iat`` as aware UTC datetime.
    :ivar expires_at: ``exp`` as aware UTC datetime.
    """

    identity_id: int
    email: str
    username: str
    full_name: str
    token_id: str
    issued_at: datetime
    expires_at: datetime
    kind: TokenKind = TokenKind.ACCESS


@dataclass(frozen=True, slots=True)
class RefreshClaims:
    """
    Verified payload of a refresh token. Carries the identity reference only.
    """

    identity_id: int
    token_id: str
    issued_at: datetime
    expires_at: datetime
    kind: TokenKind = TokenKind.REFRESH


Claims = AccessClaims | RefreshClaims


class TokenProvider(Protocol):
    """Port for issuing and verifying signed tokens.

    Implementations sign each kind with its own secret and lifetime.
    ``verify`` raises :class:`~vidhub.services._shared.errors.TokenError`
    on any failure and never returns claims of a different kind.
    """

    def issue_access(self, subject: TokenSubject) -> str: ...

    def issue_refresh(self, subject: TokenSubject) -> str: ...

    def verify_access(self, token: str) -> AccessClaims: ...

    def verify_refresh(self, token: str) -> RefreshClaims: ...

    def verify(self, token: str, kind: TokenKind) -> Claims: ...
