# app/services/profile/service.py
"""
ProfileService
==============

Reads and mutates the authenticated user's own account: details, avatar and
cover image. Media goes through the :class:`MediaStore` port before the row
is touched.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from app.core.extensions import get_media_store
from app.repositories.user import UserRepository
from app.services._shared.base import BaseService
from app.services._shared.errors import (
    AuthError,
    ConflictError,
    UploadError,
    ValidationError,
    violates,
)
from app.services._shared.policies.common import is_blank, require_non_blank
from app.services._shared.ports.media_store import MediaStore
from app.services.auth.dto import UserPublicOut
from app.services.profile.dto import UpdateMediaIn, UpdateProfileIn

log = logging.getLogger(__name__)

# Media slots on the user row, keyed by the multipart field that feeds them
MEDIA_SLOTS = {
    "avatar": "avatar_url",
    "coverImage": "cover_image_url",
}


class ProfileService(BaseService):
    """Application service for the authenticated user's own profile."""

    def __init__(self, *, media_store: MediaStore | None = None) -> None:
        super().__init__()
        self.media = media_store

    def get_current_user(self, user_id: int | None) -> UserPublicOut:
        """
        Return the authenticated user.

        :param user_id: Identity resolved from the access token.
        :raises AuthError: No identity, or the user no longer exists.
        """
        if user_id is None:
            raise AuthError("Unauthorized request")
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise AuthError("Unauthorized request")
            return UserPublicOut.from_model(user)

    def update_profile(self, dto: UpdateProfileIn) -> UserPublicOut:
        """
        Replace full name and email.

        :raises ValidationError: Either field is blank or malformed.
        :raises AuthError: The user no longer exists.
        :raises ConflictError: The email belongs to another user.
        """
        require_non_blank(full_name=dto.full_name, email=dto.email)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(dto.user_id)
            if user is None:
                raise AuthError("Unauthorized request")
            if repo.email_taken_by_other(dto.email, user.id):
                raise ConflictError("User", "Email already in use")
            try:
                repo.assign_updates(user, {"full_name": dto.full_name, "email": dto.email})
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "Email already in use") from exc
                raise
            out = UserPublicOut.from_model(user)

        log.info("user.profile_updated", extra={"user_id": out.id})
        return out

    def update_avatar(self, dto: UpdateMediaIn) -> UserPublicOut:
        """Upload and persist a new avatar."""
        return self._replace_media(dto, field="avatar")

    def update_cover_image(self, dto: UpdateMediaIn) -> UserPublicOut:
        """Upload and persist a new cover image."""
        return self._replace_media(dto, field="coverImage")

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _replace_media(self, dto: UpdateMediaIn, *, field: str) -> UserPublicOut:
        """
        Store ``dto.local_path`` and write its URL into the slot for ``field``.

        :raises ValidationError: No file was supplied.
        :raises UploadError: The media store returned nothing.
        :raises AuthError: The user no longer exists.
        """
        column = MEDIA_SLOTS[field]
        if is_blank(dto.local_path):
            raise ValidationError(f"{field} file is missing", fields=[field])

        if self.media is None:
            self.media = get_media_store()
        stored = self.media.store(dto.local_path)
        if stored is None:
            log.warning("media.upload_failed", extra={"user_id": dto.user_id, "code": field})
            raise UploadError(f"Error while uploading {field}")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(dto.user_id)
            if user is None:
                raise AuthError("Unauthorized request")
            repo.assign_updates(user, {column: stored.url})
            out = UserPublicOut.from_model(user)

        log.info("user.media_updated", extra={"user_id": out.id, "code": field})
        return out
