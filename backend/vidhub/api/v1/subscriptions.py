"""Subscription endpoints (toggle + listings)."""

from __future__ import annotations

from flask import Blueprint, g

from vidhub.api.deps import api_response, parse_pagination, require_auth, timing, toggle_service
from vidhub.schemas import ToggleResultSchema, UserSummarySchema, page_schema
from vidhub.services import ToggleKind

bp = Blueprint("subscriptions", __name__)

toggle_schema = ToggleResultSchema()
user_page_schema = page_schema(UserSummarySchema)


@bp.post("/c/<int:channel_id>")
@require_auth
@timing
def toggle_subscription(channel_id: int):
    result = toggle_service().toggle(g.identity.id, channel_id, ToggleKind.SUBSCRIPTION)
    message = "Subscribed successfully" if result.created else "Unsubscribed successfully"
    return api_response(toggle_schema.dump(result), message)


@bp.get("/c/<int:channel_id>")
@timing
def channel_subscribers(channel_id: int):
    page = toggle_service().subscribers(channel_id, parse_pagination())
    return api_response(user_page_schema.dump(page), "Subscribers fetched successfully")


@bp.get("/u/<int:subscriber_id>")
@timing
def subscribed_channels(subscriber_id: int):
    page = toggle_service().subscribed_channels(subscriber_id, parse_pagination())
    return api_response(user_page_schema.dump(page), "Subscribed channels fetched successfully")
