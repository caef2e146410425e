"""Toggle result schema (subscriptions and likes)."""

from __future__ import annotations

from marshmallow import Schema, fields

from vidhub.services.toggles.dto import ToggleKind


class ToggleResultSchema(Schema):
    created = fields.Boolean()
    kind = fields.Enum(ToggleKind, by_value=True)
    target_id = fields.Integer()
