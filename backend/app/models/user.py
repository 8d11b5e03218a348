"""User model: the credential store of the platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.core.extensions import db
from app.core.security import hash_password, verify_password

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .video import Video
    from .watch_history import WatchHistoryEntry


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity, credentials and channel media.

    Fields
    ------
    username : str
        Public handle. Stored trimmed and lowercased, unique.
    email : str
        Login email. Stored normalized (lowercase, trimmed), unique.
    full_name : str
        Display name.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    avatar_url : str
        Required avatar location in the media store.
    cover_image_url : str
        Optional cover image location; empty string when absent.
    refresh_token_hash : str | None
        SHA-256 digest of the single live refresh token. ``None`` means no
        active refresh session.
    """

    __tablename__ = "users"
    __repr_attrs__ = ("username",)

    # Columns
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(512), nullable=False)
    cover_image_url: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    refresh_token_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Relationships
    videos: Mapped[list[Video]] = relationship(back_populates="owner")
    watch_history: Mapped[list[WatchHistoryEntry]] = relationship(
        back_populates="user",
        order_by="WatchHistoryEntry.id",
        cascade="all, delete-orphan",
    )

    # uq_* names are matched by services to report 409s
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_full_name", "full_name"),
    )

    # Credentials

    @property
    def password(self) -> Any:
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """Store the hash of ``raw``; blank input raises :class:`ValueError`."""
        self.password_hash = hash_password(raw)

    def verify_password(self, raw: str) -> bool:
        """Return ``True`` when ``raw`` matches the stored hash."""
        return verify_password(raw, self.password_hash)

    # Normalisation (runs on construction and on every assignment)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """Trim and lowercase; require ``local@domain.tld`` shape."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Email is required.")
        email = value.strip().lower()
        local, _, domain = email.partition("@")
        if not local or "." not in domain:
            raise ValueError("Email format looks invalid.")
        return email

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """Trim and lowercase the username; reject blank values."""
        username = value.strip().lower() if isinstance(value, str) else ""
        if not username:
            raise ValueError("Username is required.")
        return username

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Full name is required.")
        return value.strip()

    @validates("avatar_url")
    def _require_avatar(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value:
            raise ValueError("Avatar URL is required.")
        return value

    @validates("cover_image_url")
    def _normalize_cover(self, key: str, value: str | None) -> str:
        return value or ""
