# app/services/auth/dto.py
"""
DTOs for AuthService.

Data Transfer Objects isolate the service layer from ORM models. Outward user
representations never carry the password hash or the refresh-token digest.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param username: Public handle (stored lowercased).
    :type username: str
    :param email: Login email.
    :type email: str
    :param full_name: Display name.
    :type full_name: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param avatar_path: Local path of the staged avatar file.
    :type avatar_path: str | None
    :param cover_path: Local path of the staged cover image, if any.
    :type cover_path: str | None
    """

    username: str
    email: str
    full_name: str
    password: str
    avatar_path: str | None = None
    cover_path: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one identifier must be non-blank.

    :param password: Raw password (to be verified).
    :type password: str
    :param username: Username, matched case-insensitively.
    :type username: str | None
    :param email: Email, matched case-insensitively.
    :type email: str | None
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """
    Input DTO for changing the authenticated user's password.

    :param user_id: Authenticated user identifier.
    :type user_id: int
    :param old_password: Current password.
    :type old_password: str
    :param new_password: New password (raw).
    :type new_password: str
    """

    user_id: int
    old_password: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user representation.

    :param id: User identifier.
    :type id: int
    :param username: Lowercased username.
    :type username: str
    :param email: Email address.
    :type email: str
    :param full_name: Display name.
    :type full_name: str
    :param avatar_url: Avatar location.
    :type avatar_url: str
    :param cover_image_url: Cover image location (empty when unset).
    :type cover_image_url: str
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url or "",
        )


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param user: Authenticated user.
    :type user: UserPublicOut
    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    user: UserPublicOut
    access_token: str
    refresh_token: str
