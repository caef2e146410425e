"""Playlist Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import UserSummarySchema
from .video import VideoSchema


class PlaylistCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    description = fields.String(load_default="")


class PlaylistUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(load_default=None, validate=validate.Length(max=120))
    description = fields.String(load_default=None)


class PlaylistSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    description = fields.String()
    owner = fields.Nested(UserSummarySchema)
    videos = fields.List(fields.Nested(VideoSchema))
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
