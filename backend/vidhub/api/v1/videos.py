"""Video endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidhub.api.deps import (
    api_response,
    optional_auth,
    require_auth,
    timing,
    video_service,
)
from vidhub.schemas import (
    VideoPublishSchema,
    VideoQuerySchema,
    VideoSchema,
    VideoUpdateSchema,
    page_schema,
)
from vidhub.services import PaginationIn, VideoPublishIn, VideoQueryIn, VideoUpdateIn

bp = Blueprint("videos", __name__)

publish_schema = VideoPublishSchema()
update_schema = VideoUpdateSchema()
query_schema = VideoQuerySchema()
video_schema = VideoSchema()
video_page_schema = page_schema(VideoSchema)


def _form() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


@bp.get("")
@optional_auth
@timing
def list_videos():
    """Published videos, newest first. Filters: ``query``, ``user_id``."""
    data = query_schema.load(request.args)
    page = video_service().list(
        VideoQueryIn(query=data["query"], owner_id=data["user_id"]),
        PaginationIn(page=data["page"], limit=data["limit"], sort=tuple(data["sort"])),
    )
    return api_response(video_page_schema.dump(page), "Videos fetched successfully")


@bp.post("")
@require_auth
@timing
def publish_video():
    data = publish_schema.load(_form())
    video = video_service().publish(
        VideoPublishIn(
            title=data["title"],
            description=data["description"],
            duration=data["duration"],
            video_file=request.files.get("videoFile"),
            thumbnail=request.files.get("thumbnail"),
        )
    )
    return api_response(video_schema.dump(video), "Video published successfully", status=201)


@bp.get("/<int:video_id>")
@optional_auth
@timing
def get_video(video_id: int):
    video = video_service().get(video_id)
    return api_response(video_schema.dump(video), "Video fetched successfully")


@bp.patch("/<int:video_id>")
@require_auth
@timing
def update_video(video_id: int):
    data = update_schema.load(_form())
    video = video_service().update(
        video_id,
        VideoUpdateIn(
            title=data["title"],
            description=data["description"],
            thumbnail=request.files.get("thumbnail"),
        ),
    )
    return api_response(video_schema.dump(video), "Video updated successfully")


@bp.delete("/<int:video_id>")
@require_auth
@timing
def delete_video(video_id: int):
    video_service().delete(video_id)
    return api_response({}, "Video deleted successfully")


@bp.patch("/<int:video_id>/publish")
@require_auth
@timing
def toggle_publish(video_id: int):
    video = video_service().toggle_publish(video_id)
    return api_response(video_schema.dump(video), "Video publish status toggled")
