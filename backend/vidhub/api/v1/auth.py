"""Authentication endpoints: register, login, refresh, logout, me."""

from __future__ import annotations

from flask import Blueprint, current_app, g, request

from vidhub.api.deps import (
    api_response,
    auth_service,
    identity_service,
    refresh_token_from_request,
    require_auth,
    timing,
    with_session_cookies,
    without_session_cookies,
)
from vidhub.core.extensions import limiter
from vidhub.schemas import IdentitySchema, LoginSchema, RegisterSchema, SessionSchema
from vidhub.services import LoginIn, LogoutIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
identity_schema = IdentitySchema()
session_schema = SessionSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "10 per minute"))


def _payload() -> dict:
    """JSON body, or the form fields of a multipart request."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


@bp.post("/register")
@timing
def register():
    """Create an identity. Accepts optional ``avatar`` / ``coverImage`` files."""
    data = register_schema.load(_payload())
    user = identity_service().register(
        RegisterIn(
            username=data["username"],
            email=data["email"],
            full_name=data["full_name"],
            password=data["password"],
            avatar=request.files.get("avatar"),
            cover_image=request.files.get("coverImage"),
        )
    )
    return api_response(identity_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    data = login_schema.load(_payload())
    session = auth_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    response = api_response(session_schema.dump(session), "User logged in successfully")
    return with_session_cookies(
        response,
        access_token=session.tokens.access_token,
        refresh_token=session.tokens.refresh_token,
    )


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token (cookie or ``X-Refresh-Token`` header)."""
    session = auth_service().refresh(RefreshIn(refresh_token=refresh_token_from_request()))
    response = api_response(session_schema.dump(session), "Access token refreshed")
    return with_session_cookies(
        response,
        access_token=session.tokens.access_token,
        refresh_token=session.tokens.refresh_token,
    )


@bp.post("/logout")
@require_auth
@timing
def logout():
    auth_service().logout(LogoutIn(user_id=g.identity.id, access_token=g.access_token))
    return without_session_cookies(api_response({}, "User logged out"))


@bp.get("/me")
@require_auth
@timing
def me():
    return api_response(identity_schema.dump(g.identity), "Current user fetched successfully")
