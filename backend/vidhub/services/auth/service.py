# vidhub/services/auth/service.py
from __future__ import annotations

import logging

from vidhub.repositories.user import UserRepository
from vidhub.services._shared.base import BaseService, ServiceContext
from vidhub.services._shared.errors import (
    AuthenticationError,
    NotFoundError,
    TokenError,
    ValidationError,
)
from vidhub.services._shared.ports.denylist_store import TokenDenylistStore
from vidhub.services._shared.ports.token_provider import TokenProvider, TokenSubject
from vidhub.services.auth.dto import (
    LoginIn,
    LogoutIn,
    RefreshIn,
    SessionOut,
    TokenPairOut,
)
from vidhub.services.identity.dto import IdentityOut, identity_out

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Session lifecycle: login, refresh rotation, logout and authentication.

    Each identity has exactly one live refresh token, stored on the user
    row. Refresh swaps it with a conditional ``UPDATE`` so a replayed or
    concurrently reused token loses. Logged-out access tokens are kept in
    a denylist until they expire.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        denylist_store: TokenDenylistStore,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param token_provider: Adapter issuing/verifying JWTs.
        :param denylist_store: Denylist for access tokens (jti-based).
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.denylist = denylist_store

    def _issue_pair(self, subject: TokenSubject) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.tokens.issue_access(subject),
            refresh_token=self.tokens.issue_refresh(subject),
        )

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Verify credentials and start a session.

        The new refresh token overwrites any previous one, ending the prior
        session.

        :raises ValidationError: Neither username nor email given.
        :raises NotFoundError: No identity matches.
        :raises AuthenticationError: Wrong password.
        """
        if not (dto.username or dto.email):
            raise ValidationError("username or email is required")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_handle_or_email(username=dto.username, email=dto.email)
            if user is None:
                raise NotFoundError("User", dto.username or dto.email or "")
            if not user.verify_password(dto.password):
                logger.warning("Login rejected", extra={"actor_id": user.id, "reason": "password"})
                raise AuthenticationError("Invalid user credentials")

            tokens = self._issue_pair(user)
            repo.set_refresh_token(user.id, tokens.refresh_token)
            identity = identity_out(user)

        logger.info("User logged in", extra={"actor_id": identity.id})
        return SessionOut(user=identity, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> SessionOut:
        """
        Rotate the refresh token and issue a new pair.

        :raises AuthenticationError: Missing, invalid, expired, unknown or
            already-rotated token. All map to 401.
        """
        if not dto.refresh_token:
            raise AuthenticationError("Unauthorized request")
        try:
            claims = self.tokens.verify_refresh(dto.refresh_token)
        except TokenError as exc:
            logger.warning("Refresh token rejected", extra={"reason": exc.reason.value})
            raise TokenError(exc.reason, "Invalid refresh token") from exc

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(claims.identity_id)
            if user is None:
                raise AuthenticationError("Invalid refresh token")

            tokens = self._issue_pair(user)
            if not repo.rotate_refresh_token(user.id, dto.refresh_token, tokens.refresh_token):
                logger.warning(
                    "Refresh token replay rejected",
                    extra={"actor_id": user.id, "reason": "stale"},
                )
                raise AuthenticationError("Refresh token is expired or already used")
            identity = identity_out(user)

        logger.info("Session refreshed", extra={"actor_id": identity.id})
        return SessionOut(user=identity, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """Unset the stored refresh token and denylist the presented access token."""
        with self.rw_uow() as uow:
            uow.users.clear_refresh_token(dto.user_id)

        if dto.access_token:
            claims = self.tokens.verify_access(dto.access_token)
            self.denylist.revoke_jti(jti=claims.token_id, expires_at=claims.expires_at)

        logger.info("User logged out", extra={"actor_id": dto.user_id})

    # ------------------------------------------------------------------ #
    # Authentication (read-only)
    # ------------------------------------------------------------------ #

    def authenticate(self, access_token: str | None) -> IdentityOut:
        """
        Resolve an access token to its identity.

        Runs inside a read-only unit of work and never writes.

        :raises AuthenticationError: On any failure (401).
        """
        if not access_token:
            raise AuthenticationError("Unauthorized request")
        try:
            claims = self.tokens.verify_access(access_token)
        except TokenError as exc:
            logger.info("Access token rejected", extra={"reason": exc.reason.value})
            raise TokenError(exc.reason, "Invalid access token") from exc

        if self.denylist.is_revoked(claims.token_id):
            raise AuthenticationError("Access token has been revoked")

        with self.ro_uow() as uow:
            user = uow.users.get(claims.identity_id)
            if user is None:
                raise AuthenticationError("Invalid access token")
            return identity_out(user)
