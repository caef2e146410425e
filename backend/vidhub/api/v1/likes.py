"""Like endpoints (toggle + liked videos)."""

from __future__ import annotations

from flask import Blueprint, g

from vidhub.api.deps import api_response, parse_pagination, require_auth, timing, toggle_service
from vidhub.schemas import ToggleResultSchema, VideoSchema, page_schema
from vidhub.services import ToggleKind

bp = Blueprint("likes", __name__)

toggle_schema = ToggleResultSchema()
video_page_schema = page_schema(VideoSchema)


def _toggle(target_id: int, kind: ToggleKind, noun: str):
    result = toggle_service().toggle(g.identity.id, target_id, kind)
    message = f"{noun} liked" if result.created else f"{noun} unliked"
    return api_response(toggle_schema.dump(result), message)


@bp.post("/toggle/v/<int:video_id>")
@require_auth
@timing
def toggle_video_like(video_id: int):
    return _toggle(video_id, ToggleKind.VIDEO_LIKE, "Video")


@bp.post("/toggle/c/<int:comment_id>")
@require_auth
@timing
def toggle_comment_like(comment_id: int):
    return _toggle(comment_id, ToggleKind.COMMENT_LIKE, "Comment")


@bp.get("/videos")
@require_auth
@timing
def liked_videos():
    page = toggle_service().liked_videos(g.identity.id, parse_pagination())
    return api_response(video_page_schema.dump(page), "Liked videos fetched successfully")
