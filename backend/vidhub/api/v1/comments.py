"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidhub.api.deps import api_response, comment_service, parse_pagination, require_auth, timing
from vidhub.schemas import CommentInSchema, CommentSchema, page_schema
from vidhub.services import CommentIn

bp = Blueprint("comments", __name__)

comment_in_schema = CommentInSchema()
comment_schema = CommentSchema()
comment_page_schema = page_schema(CommentSchema)


@bp.get("/<int:video_id>")
@timing
def list_comments(video_id: int):
    page = comment_service().list_for_video(video_id, parse_pagination())
    return api_response(comment_page_schema.dump(page), "Comments fetched successfully")


@bp.post("/<int:video_id>")
@require_auth
@timing
def add_comment(video_id: int):
    data = comment_in_schema.load(request.get_json(silent=True) or {})
    comment = comment_service().add(video_id, CommentIn(content=data["content"]))
    return api_response(comment_schema.dump(comment), "Comment added successfully", status=201)


@bp.patch("/c/<int:comment_id>")
@require_auth
@timing
def update_comment(comment_id: int):
    data = comment_in_schema.load(request.get_json(silent=True) or {})
    comment = comment_service().update(comment_id, CommentIn(content=data["content"]))
    return api_response(comment_schema.dump(comment), "Comment updated successfully")


@bp.delete("/c/<int:comment_id>")
@require_auth
@timing
def delete_comment(comment_id: int):
    comment_service().delete(comment_id)
    return api_response({}, "Comment deleted successfully")
