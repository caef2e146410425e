"""Comment Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import UserSummarySchema


class CommentInSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(required=True, validate=validate.Length(min=1, max=5000))


class CommentSchema(Schema):
    id = fields.Integer()
    video_id = fields.Integer()
    content = fields.String()
    owner = fields.Nested(UserSummarySchema)
    likes_count = fields.Integer()
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
