"""Product schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

MISSING = {
    "required": "Missing required product fields",
    "null": "Missing required product fields",
}


class ProductCreateSchema(Schema):
    """Input payload for creating a product."""

    name = fields.String(
        required=True, error_messages=MISSING, validate=validate.Length(min=1, max=200)
    )
    description = fields.String(required=True, error_messages=MISSING)
    price = fields.Float(
        required=True,
        error_messages=MISSING,
        validate=validate.Range(min=0, error="Price must be non-negative"),
    )
    category = fields.String(
        required=True, error_messages=MISSING, validate=validate.Length(min=1, max=50)
    )
    image = fields.String(load_default=None, allow_none=True)


class ProductSchema(Schema):
    """Serialized product representation."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    description = fields.String()
    price = fields.Float(required=True)
    image = fields.String()
    category = fields.String(required=True)
    is_featured = fields.Boolean(data_key="isFeatured")
