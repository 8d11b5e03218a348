"""Schemas shared by several endpoints (pagination in and out)."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


class PaginationQuerySchema(Schema):
    """``?page=&limit=`` query string.

    Pagination is opt-in. With neither key present ``load`` returns ``{}``.
    With either one, the missing key gets its default and ``limit`` is capped.
    """

    page = fields.Integer(validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = 20, max_limit: int = 100, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.default_limit = default_limit
        self.max_limit = max_limit

    @post_load
    def fill_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        if data:
            data = {
                "page": data.get("page", 1),
                "limit": min(data.get("limit", self.default_limit), self.max_limit),
            }
        return data


class MetaSchema(Schema):
    """``meta`` block next to a page of ``items``."""

    total = fields.Integer(required=True)
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    has_prev = fields.Boolean(data_key="hasPrev", required=True)
    has_next = fields.Boolean(data_key="hasNext", required=True)
