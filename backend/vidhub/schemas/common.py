"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


class PaginationQuerySchema(Schema):
    """
    ``?page=&limit=&sort=`` with ``sort`` as comma separated tokens.

    ``limit`` falls back to ``default_limit`` and is capped at ``max_limit``.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))
    sort = fields.String(load_default="")

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("sort") or ""
        data["sort"] = [token.strip() for token in raw.split(",") if token.strip()]
        data["limit"] = min(data.get("limit", self._default_limit), self._max_limit)
        return data


class PageMetaSchema(Schema):
    page = fields.Integer()
    limit = fields.Integer()
    total = fields.Integer()
    has_prev = fields.Boolean()
    has_next = fields.Boolean()


class UserSummarySchema(Schema):
    """Embedded owner/author projection."""

    id = fields.Integer()
    username = fields.String()
    full_name = fields.String()
    avatar_url = fields.String(allow_none=True)


def page_schema(item_schema: type[Schema]) -> Schema:
    """Schema instance dumping a ``PageOut`` of ``item_schema`` items."""
    schema_cls = Schema.from_dict(
        {
            "items": fields.List(fields.Nested(item_schema)),
            "meta": fields.Nested(PageMetaSchema),
        },
        name=f"{item_schema.__name__}Page",
    )
    return schema_cls()
