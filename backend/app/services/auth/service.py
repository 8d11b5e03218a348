# app/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from app.core.extensions import get_media_store
from app.core.security import hash_refresh_token, refresh_token_matches
from app.models.user import User
from app.repositories.user import UserRepository
from app.services._shared.base import BaseService
from app.services._shared.errors import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    UploadError,
    ValidationError,
    violates,
)
from app.services._shared.policies.common import is_blank, require_non_blank
from app.services._shared.ports.media_store import MediaStore
from app.services._shared.ports.token_provider import (
    REFRESH,
    TokenProvider,
    TokenVerificationError,
)
from app.services.auth.dto import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RegisterIn,
    TokenPairOut,
    UserPublicOut,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Account lifecycle service (register / login / refresh / logout / password).

    Tokens are issued through a pluggable :class:`TokenProvider`. The only
    server-side session state is the digest of the user's single live refresh
    token, stored on the user row and rotated with a conditional update.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        media_store: MediaStore | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing/verifying JWTs.
        :param media_store: External media host for :meth:`register`; the
            application's store is used when omitted.
        """
        super().__init__()
        self.tokens = token_provider
        self.media = media_store

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create an account with its avatar (and optional cover image).

        :param dto: Registration input.
        :returns: The created user, without credentials.
        :raises ValidationError: Blank text field or missing avatar.
        :raises ConflictError: Username or email already in use.
        :raises UploadError: The avatar could not be stored.
        :raises InternalError: The created row could not be read back.
        """
        require_non_blank(
            username=dto.username,
            email=dto.email,
            full_name=dto.full_name,
            password=dto.password,
        )

        with self.ro_uow() as uow:
            if uow.users.exists_by_username_or_email(username=dto.username, email=dto.email):
                raise ConflictError("User", "User with email or username already exists")

        if is_blank(dto.avatar_path):
            raise ValidationError("Avatar file is required", fields=["avatar"])

        media = self._media()
        avatar = media.store(dto.avatar_path)
        if avatar is None:
            raise UploadError("Avatar file upload failed")

        cover_url = ""
        if not is_blank(dto.cover_path):
            cover = media.store(dto.cover_path)
            if cover is None:
                log.warning("media.cover_upload_failed", extra={"username": dto.username})
            else:
                cover_url = cover.url

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            try:
                user = User(
                    username=dto.username,
                    email=dto.email,
                    full_name=dto.full_name,
                    avatar_url=avatar.url,
                    cover_image_url=cover_url,
                )
                user.password = dto.password
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            try:
                repo.add(user)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email") or violates(exc, "uq_users_username"):
                    raise ConflictError(
                        "User", "User with email or username already exists"
                    ) from exc
                raise

            # Read back inside the same transaction; a miss rolls everything back
            created = repo.get(user.id)
            if created is None:
                raise InternalError("Something went wrong while registering the user")
            out = UserPublicOut.from_model(created)

        log.info("user.registered", extra={"user_id": out.id, "username": out.username})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh token pair.

        The new refresh token replaces any previous one for the user.

        :param dto: Login input.
        :returns: User plus access/refresh tokens.
        :raises ValidationError: Neither username nor email given.
        :raises NotFoundError: No user matches.
        :raises AuthError: Password mismatch (stored session untouched).
        """
        if is_blank(dto.username) and is_blank(dto.email):
            raise ValidationError("Username or email is required", fields=["username", "email"])

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_username_or_email(username=dto.username, email=dto.email)
            if user is None:
                raise NotFoundError("User", (dto.username or dto.email or "").strip())
            if not user.verify_password(dto.password):
                log.warning("user.login_rejected", extra={"user_id": user.id})
                raise AuthError("Invalid user credentials")

            pair = self._issue_pair(user.id)
            repo.set_refresh_token_hash(user, hash_refresh_token(pair.refresh_token))
            out = LoginOut(
                user=UserPublicOut.from_model(user),
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
            )

        log.info("user.login", extra={"user_id": out.user.id})
        return out

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, user_id: int) -> None:
        """Drop the user's refresh session. Safe to call repeatedly."""
        with self.rw_uow() as uow:
            uow.users.clear_refresh_token(user_id)
        log.info("user.logout", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Refresh with atomic rotation
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str | None) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        Security
        --------
        - The incoming token must verify and its digest must equal the one
          stored for its subject (exact match).
        - The swap to the new digest is a conditional update, so a token can
          win at most one rotation; the loser gets :class:`AuthError`.
        """
        if is_blank(refresh_token):
            raise AuthError("Unauthorized request")

        try:
            user_id = self.tokens.verify(refresh_token, REFRESH)
        except TokenVerificationError as exc:
            log.warning("token.refresh_rejected", extra={"code": "invalid"})
            raise AuthError("Invalid refresh token") from exc

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise AuthError("Invalid refresh token")
            if not refresh_token_matches(refresh_token, user.refresh_token_hash):
                log.warning("token.refresh_rejected", extra={"user_id": user_id, "code": "stale"})
                raise AuthError("Refresh token is expired or used")

            pair = self._issue_pair(user.id)
            rotated = repo.rotate_refresh_token(
                user.id,
                expected=hash_refresh_token(refresh_token),
                new=hash_refresh_token(pair.refresh_token),
            )
            if not rotated:
                log.warning("token.refresh_rejected", extra={"user_id": user_id, "code": "race"})
                raise AuthError("Refresh token is expired or used")

        log.info("token.refreshed", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Password change
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the password after verifying the current one.

        Existing refresh sessions stay valid.

        :raises ValidationError: Either password is blank.
        :raises AuthError: Unknown user or wrong current password.
        """
        require_non_blank(
            "Old and new password are required",
            old_password=dto.old_password,
            new_password=dto.new_password,
        )
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(dto.user_id)
            if user is None:
                raise AuthError("Unauthorized request")
            if not user.verify_password(dto.old_password):
                raise AuthError("Invalid old password")
            repo.update_password(user, dto.new_password)

        log.info("user.password_changed", extra={"user_id": dto.user_id})

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_pair(self, user_id: int) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.tokens.issue_access(user_id),
            refresh_token=self.tokens.issue_refresh(user_id),
        )

    def _media(self) -> MediaStore:
        # Resolved on first upload so input errors surface before config errors
        if self.media is None:
            self.media = get_media_store()
        return self.media
