"""Authentication-related Marshmallow schemas.

Input schemas check shape and email syntax; credential policies (password
strength, handle length, normalization) are enforced by the service layer.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class RegisterSchema(Schema):
    """Registration payload (JSON body or multipart form fields)."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True)
    email = fields.Email(required=True, validate=validate.Length(max=254))
    full_name = fields.String(required=True)
    password = fields.String(required=True, validate=validate.Length(max=128))


class LoginSchema(Schema):
    """Login payload; either ``username`` or ``email`` identifies the account."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class IdentitySchema(Schema):
    """Public identity; never carries the hash or refresh token."""

    id = fields.Integer()
    username = fields.String()
    email = fields.String()
    full_name = fields.String()
    avatar_url = fields.String(allow_none=True)
    cover_image_url = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)


class SessionSchema(Schema):
    """Login/refresh response: the identity plus both tokens."""

    user = fields.Nested(IdentitySchema)
    access_token = fields.Function(lambda s: s.tokens.access_token)
    refresh_token = fields.Function(lambda s: s.tokens.refresh_token)
