# vidhub/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended import JWTManager, create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from vidhub.services._shared.errors import TokenError, TokenErrorReason
from vidhub.services._shared.ports.token_provider import (
    AccessClaims,
    Claims,
    RefreshClaims,
    TokenKind,
    TokenSubject,
)


@dataclass(frozen=True, slots=True)
class _Issue:
    """Identity handed to flask-jwt-extended so the key loader knows the kind."""

    kind: TokenKind
    identity_id: int


def _secret_for(kind: TokenKind | str | None) -> str:
    if kind in (TokenKind.REFRESH, TokenKind.REFRESH.value):
        return str(current_app.config["REFRESH_TOKEN_SECRET"])
    return str(current_app.config["ACCESS_TOKEN_SECRET"])


def register_jwt_callbacks(manager: JWTManager) -> None:
    """
    Teach flask-jwt-extended to sign each token kind with its own secret.

    ``identity`` passed to ``create_*_token`` is an :class:`_Issue`; the
    encode loader picks the secret from its kind and the decode loader
    picks it from the (still unverified) ``type`` claim, so a token signed
    with one kind's secret never verifies as the other kind.
    """

    @manager.user_identity_loader
    def _identity(identity: Any) -> str:
        if isinstance(identity, _Issue):
            return str(identity.identity_id)
        return str(identity)

    @manager.encode_key_loader
    def _encode_key(identity: Any) -> str:
        return _secret_for(identity.kind if isinstance(identity, _Issue) else TokenKind.ACCESS)

    @manager.decode_key_loader
    def _decode_key(jwt_header: dict[str, Any], jwt_data: dict[str, Any]) -> str:
        return _secret_for(jwt_data.get("type"))


def _ts(value: Any) -> datetime:
    return datetime.fromtimestamp(int(value), tz=UTC)


@dataclass(slots=True)
class JWTTokenProvider:
    """
    Adapter for Flask-JWT-Extended.

    .. note::
       Requires an active Flask app context with the JWT settings from
       :mod:`vidhub.core.config`. Lifetimes default to
       ``JWT_ACCESS_TOKEN_EXPIRES`` / ``JWT_REFRESH_TOKEN_EXPIRES`` and can be
       overridden per instance.
    """

    access_expires: timedelta | None = None
    refresh_expires: timedelta | None = None

    # ------------------------------ Issue ------------------------------

    def issue_access(self, subject: TokenSubject) -> str:
        return create_access_token(
            identity=_Issue(TokenKind.ACCESS, int(subject.id)),
            additional_claims={
                "email": subject.email,
                "username": subject.username,
                "full_name": subject.full_name,
            },
            expires_delta=self.access_expires
            or current_app.config["JWT_ACCESS_TOKEN_EXPIRES"],
        )

    def issue_refresh(self, subject: TokenSubject) -> str:
        return create_refresh_token(
            identity=_Issue(TokenKind.REFRESH, int(subject.id)),
            expires_delta=self.refresh_expires
            or current_app.config["JWT_REFRESH_TOKEN_EXPIRES"],
        )

    # ------------------------------ Verify -----------------------------

    def verify(self, token: str, kind: TokenKind) -> Claims:
        """
        Verify signature, expiry and kind of ``token``.

        :raises TokenError: ``EXPIRED``, ``SIGNATURE_INVALID`` or ``MALFORMED``.
        """
        if not token or not isinstance(token, str):
            raise TokenError(TokenErrorReason.MALFORMED)
        try:
            payload = decode_token(token)
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenError(TokenErrorReason.EXPIRED) from exc
        except pyjwt.InvalidSignatureError as exc:
            raise TokenError(TokenErrorReason.SIGNATURE_INVALID) from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise TokenError(TokenErrorReason.MALFORMED) from exc

        if payload.get("type") != kind.value:
            raise TokenError(TokenErrorReason.MALFORMED, f"Expected a {kind.value} token")
        try:
            if kind is TokenKind.ACCESS:
                return AccessClaims(
                    identity_id=int(payload["sub"]),
                    email=str(payload["email"]),
                    username=str(payload["username"]),
                    full_name=str(payload["full_name"]),
                    token_id=str(payload["jti"]),
                    issued_at=_ts(payload["iat"]),
                    expires_at=_ts(payload["exp"]),
                )
            return RefreshClaims(
                identity_id=int(payload["sub"]),
                token_id=str(payload["jti"]),
                issued_at=_ts(payload["iat"]),
                expires_at=_ts(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenError(TokenErrorReason.MALFORMED) from exc

    def verify_access(self, token: str) -> AccessClaims:
        return cast(AccessClaims, self.verify(token, TokenKind.ACCESS))

    def verify_refresh(self, token: str) -> RefreshClaims:
        return cast(RefreshClaims, self.verify(token, TokenKind.REFRESH))
