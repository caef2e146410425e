"""Video Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import PaginationQuerySchema, UserSummarySchema


class VideoPublishSchema(Schema):
    """Form fields sent next to the ``videoFile`` and ``thumbnail`` uploads."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    description = fields.String(required=True)
    duration = fields.Float(load_default=0.0, validate=validate.Range(min=0))


class VideoUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None, validate=validate.Length(max=200))
    description = fields.String(load_default=None)


class VideoQuerySchema(PaginationQuerySchema):
    """Listing query: pagination plus ``query`` and ``user_id`` filters."""

    query = fields.String(load_default=None)
    user_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class VideoSchema(Schema):
    id = fields.Integer()
    title = fields.String()
    description = fields.String()
    video_file_url = fields.String()
    thumbnail_url = fields.String()
    duration = fields.Float()
    views = fields.Integer()
    is_published = fields.Boolean()
    owner = fields.Nested(UserSummarySchema)
    created_at = fields.DateTime(allow_none=True)
    likes_count = fields.Integer(allow_none=True)
    is_liked = fields.Boolean(allow_none=True)


class WatchEntrySchema(Schema):
    video = fields.Nested(VideoSchema)
    watched_at = fields.DateTime()


class ChannelStatsSchema(Schema):
    total_videos = fields.Integer()
    total_views = fields.Integer()
    total_subscribers = fields.Integer()
    total_likes = fields.Integer()
