"""Playlist endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidhub.api.deps import (
    api_response,
    optional_auth,
    parse_pagination,
    playlist_service,
    require_auth,
    timing,
)
from vidhub.schemas import (
    PlaylistCreateSchema,
    PlaylistSchema,
    PlaylistUpdateSchema,
    page_schema,
)
from vidhub.services import PlaylistIn

bp = Blueprint("playlists", __name__)

create_schema = PlaylistCreateSchema()
update_schema = PlaylistUpdateSchema()
playlist_schema = PlaylistSchema()
playlist_page_schema = page_schema(PlaylistSchema)


@bp.post("")
@require_auth
@timing
def create_playlist():
    data = create_schema.load(request.get_json(silent=True) or {})
    playlist = playlist_service().create(
        PlaylistIn(name=data["name"], description=data["description"])
    )
    return api_response(playlist_schema.dump(playlist), "Playlist created successfully", status=201)


@bp.get("/user/<int:user_id>")
@optional_auth
@timing
def user_playlists(user_id: int):
    page = playlist_service().list_by_user(user_id, parse_pagination())
    return api_response(playlist_page_schema.dump(page), "User playlists fetched successfully")


@bp.get("/<int:playlist_id>")
@optional_auth
@timing
def get_playlist(playlist_id: int):
    playlist = playlist_service().get(playlist_id)
    return api_response(playlist_schema.dump(playlist), "Playlist fetched successfully")


@bp.patch("/<int:playlist_id>")
@require_auth
@timing
def update_playlist(playlist_id: int):
    data = update_schema.load(request.get_json(silent=True) or {})
    playlist = playlist_service().update(
        playlist_id, PlaylistIn(name=data["name"], description=data["description"])
    )
    return api_response(playlist_schema.dump(playlist), "Playlist updated successfully")


@bp.delete("/<int:playlist_id>")
@require_auth
@timing
def delete_playlist(playlist_id: int):
    playlist_service().delete(playlist_id)
    return api_response({}, "Playlist deleted successfully")


@bp.patch("/<int:playlist_id>/videos/<int:video_id>")
@require_auth
@timing
def add_video(playlist_id: int, video_id: int):
    playlist = playlist_service().add_video(playlist_id, video_id)
    return api_response(playlist_schema.dump(playlist), "Video added to playlist")


@bp.delete("/<int:playlist_id>/videos/<int:video_id>")
@require_auth
@timing
def remove_video(playlist_id: int, video_id: int):
    playlist = playlist_service().remove_video(playlist_id, video_id)
    return api_response(playlist_schema.dump(playlist), "Video removed from playlist")
