import math
from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]


class RedisTokenDenylistStore:
    """
    Denylist for **access tokens** by jti.

    Each revoked jti is a small marker key whose TTL matches the remaining
    lifetime of the token, so Redis expires entries on its own.
    """

    def __init__(self, r: redis.Redis, *, prefix: str = "deny:at:"):
        self.r = r
        self.prefix = prefix

    def _k(self, jti: str) -> str:
        return f"{self.prefix}{jti}"

    def is_revoked(self, jti: str) -> bool:
        return cast(int, self.r.exists(self._k(jti))) == 1

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        now = datetime.now(UTC).timestamp()
        ttl = math.ceil(expires_at.timestamp() - now)
        if ttl <= 0:
            # token already expired; verification rejects it anyway
            return
        self.r.set(self._k(jti), "1", ex=ttl)
