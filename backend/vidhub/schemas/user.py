"""User/channel Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class AccountUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(load_default=None)
    email = fields.Email(load_default=None, validate=validate.Length(max=254))


class PasswordChangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(required=True, validate=validate.Length(min=1))
    new_password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class ChannelProfileSchema(Schema):
    id = fields.Integer()
    username = fields.String()
    full_name = fields.String()
    avatar_url = fields.String(allow_none=True)
    cover_image_url = fields.String(allow_none=True)
    subscribers_count = fields.Integer()
    channels_subscribed_to_count = fields.Integer()
    is_subscribed = fields.Boolean()
