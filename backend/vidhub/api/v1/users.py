"""User/channel endpoints: profile edits, password, images, channel page, history."""

from __future__ import annotations

from flask import Blueprint, request

from vidhub.api.deps import (
    api_response,
    identity_service,
    optional_auth,
    parse_pagination,
    require_auth,
    timing,
    video_service,
)
from vidhub.schemas import (
    AccountUpdateSchema,
    ChannelProfileSchema,
    IdentitySchema,
    PasswordChangeSchema,
    WatchEntrySchema,
    page_schema,
)
from vidhub.services import AccountUpdateIn, PasswordChangeIn

bp = Blueprint("users", __name__)

account_update_schema = AccountUpdateSchema()
password_change_schema = PasswordChangeSchema()
identity_schema = IdentitySchema()
channel_schema = ChannelProfileSchema()
history_page_schema = page_schema(WatchEntrySchema)


@bp.patch("/<int:user_id>")
@require_auth
@timing
def update_account(user_id: int):
    data = account_update_schema.load(request.get_json(silent=True) or {})
    user = identity_service().update_account(
        user_id, AccountUpdateIn(full_name=data["full_name"], email=data["email"])
    )
    return api_response(identity_schema.dump(user), "Account details updated successfully")


@bp.post("/<int:user_id>/password")
@require_auth
@timing
def change_password(user_id: int):
    data = password_change_schema.load(request.get_json(silent=True) or {})
    identity_service().change_password(
        user_id,
        PasswordChangeIn(old_password=data["old_password"], new_password=data["new_password"]),
    )
    return api_response({}, "Password changed successfully")


@bp.patch("/<int:user_id>/avatar")
@require_auth
@timing
def update_avatar(user_id: int):
    user = identity_service().update_avatar(user_id, request.files.get("avatar"))
    return api_response(identity_schema.dump(user), "Avatar image updated successfully")


@bp.patch("/<int:user_id>/cover-image")
@require_auth
@timing
def update_cover_image(user_id: int):
    user = identity_service().update_cover_image(user_id, request.files.get("coverImage"))
    return api_response(identity_schema.dump(user), "Cover image updated successfully")


@bp.get("/c/<string:username>")
@optional_auth
@timing
def channel_profile(username: str):
    profile = identity_service().channel_profile(username)
    return api_response(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/history")
@require_auth
@timing
def watch_history():
    page = video_service().watch_history(parse_pagination())
    return api_response(history_page_schema.dump(page), "Watch history fetched successfully")
