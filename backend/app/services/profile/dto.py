# app/services/profile/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpdateProfileIn:
    """
    Input DTO for account detail updates.

    :param user_id: Authenticated user identifier.
    :type user_id: int
    :param full_name: New display name.
    :type full_name: str
    :param email: New email; must not belong to another user.
    :type email: str
    """

    user_id: int
    full_name: str
    email: str


@dataclass(frozen=True, slots=True)
class UpdateMediaIn:
    """
    Input DTO for avatar / cover image replacement.

    :param user_id: Authenticated user identifier.
    :type user_id: int
    :param local_path: Staged upload path handed to the media store.
    :type local_path: str | None
    """

    user_id: int
    local_path: str | None
