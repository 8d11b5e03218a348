"""Authentication-related Marshmallow schemas.

Input schemas only shape the payload (camelCase keys, optional strings).
Blank-field rules live in the services so every entry point reports them the
same way.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .user import UserSchema


class _Input(Schema):
    class Meta:
        unknown = EXCLUDE


class RegisterSchema(_Input):
    """Text fields of the multipart registration form."""

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    full_name = fields.String(data_key="fullName", load_default=None)
    password = fields.String(load_default=None, load_only=True)


class LoginSchema(_Input):
    """Input payload for authenticating a user by username or email."""

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(load_default=None, load_only=True)


class RefreshSchema(_Input):
    """Body fallback for the refresh token when no cookie is sent."""

    refresh_token = fields.String(data_key="refreshToken", load_default=None)


class ChangePasswordSchema(_Input):
    """Current (``password``) and replacement (``newPassword``) passwords."""

    password = fields.String(load_default=None, load_only=True)
    new_password = fields.String(data_key="newPassword", load_default=None, load_only=True)


class LoginResponseSchema(Schema):
    """Response payload of a successful login."""

    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class TokenPairSchema(Schema):
    """Response payload of a refresh."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
