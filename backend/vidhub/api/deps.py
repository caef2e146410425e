"""Shared API helpers: envelopes, authentication, service wiring, timing."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import set_access_cookies, set_refresh_cookies, unset_jwt_cookies

from vidhub.core.errors import envelope
from vidhub.core.logger import ensure_request_id
from vidhub.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from vidhub.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from vidhub.schemas.common import PaginationQuerySchema
from vidhub.services import (
    AuthService,
    CommentService,
    DashboardService,
    IdentityOut,
    IdentityService,
    PaginationIn,
    PlaylistService,
    ServiceContext,
    ToggleService,
    VideoService,
)
from vidhub.services._shared.ports.denylist_store import (
    InMemoryDenylistStore,
    TokenDenylistStore,
)
from vidhub.services._shared.ports.object_storage import ObjectStorage

F = TypeVar("F", bound=Callable[..., Any])


# ------------------------------- Responses ----------------------------------


def api_response(data: Any = None, message: str = "Success", *, status: int = 200) -> Response:
    """Wrap ``data`` in the ``{statusCode, success, data, message}`` envelope."""
    response = jsonify(envelope(status=status, data=data, message=message))
    response.status_code = status
    return response


def with_session_cookies(response: Response, *, access_token: str, refresh_token: str) -> Response:
    """Set the HttpOnly ``accessToken`` / ``refreshToken`` cookies."""
    set_access_cookies(response, access_token)
    set_refresh_cookies(response, refresh_token)
    return response


def without_session_cookies(response: Response) -> Response:
    unset_jwt_cookies(response)
    return response


# ------------------------------- Pagination ---------------------------------


def parse_pagination(default_limit: int = 10, max_limit: int = 100) -> PaginationIn:
    """Read ``page``/``limit``/``sort`` from ``request.args``."""
    data = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit).load(
        request.args
    )
    return PaginationIn(page=data["page"], limit=data["limit"], sort=tuple(data["sort"]))


# --------------------------------- Tokens -----------------------------------


def access_token_from_request() -> str | None:
    """Bearer header first, then the ``accessToken`` cookie."""
    scheme, _, value = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(current_app.config["JWT_ACCESS_COOKIE_NAME"]) or None


def refresh_token_from_request() -> str | None:
    """``X-Refresh-Token`` header first, then the ``refreshToken`` cookie."""
    header = request.headers.get(current_app.config.get("REFRESH_TOKEN_HEADER", "X-Refresh-Token"))
    if header and header.strip():
        return header.strip()
    return request.cookies.get(current_app.config["JWT_REFRESH_COOKIE_NAME"]) or None


# ------------------------------ Service wiring ------------------------------


def denylist_store() -> TokenDenylistStore:
    """Redis-backed when ``REDIS_URL`` is configured, process-local otherwise."""
    client = current_app.extensions.get("redis_client")
    if client is not None:
        return RedisTokenDenylistStore(client)
    return cast(
        TokenDenylistStore,
        current_app.extensions.setdefault("token_denylist", InMemoryDenylistStore()),
    )


def object_storage() -> ObjectStorage:
    return cast(ObjectStorage, current_app.extensions["object_storage"])


def current_identity() -> IdentityOut | None:
    return cast(IdentityOut | None, g.get("identity"))


def service_context() -> ServiceContext:
    identity = current_identity()
    return ServiceContext(
        actor_id=identity.id if identity is not None else None,
        request_id=ensure_request_id(),
    )


def auth_service() -> AuthService:
    return AuthService(
        token_provider=JWTTokenProvider(),
        denylist_store=denylist_store(),
        ctx=service_context(),
    )


def identity_service() -> IdentityService:
    return IdentityService(storage=object_storage(), ctx=service_context())


def video_service() -> VideoService:
    return VideoService(storage=object_storage(), ctx=service_context())


def comment_service() -> CommentService:
    return CommentService(ctx=service_context())


def playlist_service() -> PlaylistService:
    return PlaylistService(ctx=service_context())


def toggle_service() -> ToggleService:
    return ToggleService(ctx=service_context())


def dashboard_service() -> DashboardService:
    return DashboardService(ctx=service_context())


# ------------------------------ Decorators ----------------------------------


def require_auth(func: F) -> F:
    """Resolve the access token to ``g.identity`` or fail with 401."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = access_token_from_request()
        g.identity = auth_service().authenticate(token)
        g.access_token = token
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_auth(func: F) -> F:
    """Like :func:`require_auth` when a token is sent; anonymous otherwise."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = access_token_from_request()
        g.identity = auth_service().authenticate(token) if token else None
        g.access_token = token
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Log handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
