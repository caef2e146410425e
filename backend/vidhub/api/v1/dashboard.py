"""Channel dashboard endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidhub.api.deps import api_response, dashboard_service, require_auth, timing
from vidhub.schemas import ChannelStatsSchema, VideoSchema

bp = Blueprint("dashboard", __name__)

stats_schema = ChannelStatsSchema()
videos_schema = VideoSchema(many=True)


@bp.get("/stats")
@require_auth
@timing
def channel_stats():
    return api_response(stats_schema.dump(dashboard_service().stats()), "Channel stats fetched")


@bp.get("/videos")
@require_auth
@timing
def channel_videos():
    videos = dashboard_service().channel_videos()
    return api_response(videos_schema.dump(videos), "Channel videos fetched")
