"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

REQUIRED = {"required": "All fields are required", "null": "All fields are required"}
LOGIN_REQUIRED = {
    "required": "Email and password are required",
    "null": "Email and password are required",
}


class SignupSchema(Schema):
    """Input payload for account creation."""

    name = fields.String(
        required=True,
        error_messages=REQUIRED,
        validate=validate.Length(min=1, max=100, error="All fields are required"),
    )
    email = fields.Email(
        required=True, error_messages=REQUIRED, validate=validate.Length(max=254)
    )
    password = fields.String(
        required=True,
        error_messages=REQUIRED,
        validate=validate.Length(min=6, max=128, error="Password must be at least 6 characters"),
    )


class LoginSchema(Schema):
    """Input payload for authenticating an identity."""

    email = fields.String(required=True, error_messages=LOGIN_REQUIRED)
    password = fields.String(required=True, error_messages=LOGIN_REQUIRED)


class IdentitySchema(Schema):
    """Public identity representation. Never includes the password hash."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.String(required=True)
