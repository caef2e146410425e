from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Protocol


class TokenDenylistStore(Protocol):
    """
    Abstraction for a denylist store for **access tokens**.

    Methods are expected to be idempotent.
    """

    def is_revoked(self, jti: str) -> bool: ...
    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None: ...


class InMemoryDenylistStore(TokenDenylistStore):
    """Process-local denylist for **access** tokens by JTI.

    Used when no Redis URL is configured and in unit tests. Expired entries
    are swept on every revocation, so the map only holds live tokens.
    """

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            expires_at = self._revoked.get(jti)
            if expires_at is None:
                return False
            if expires_at <= datetime.now(UTC):
                del self._revoked[jti]
                return False
            return True

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        now = datetime.now(UTC)
        with self._lock:
            for stale in [k for k, exp in self._revoked.items() if exp <= now]:
                del self._revoked[stale]
            if expires_at > now:
                self._revoked[jti] = expires_at
