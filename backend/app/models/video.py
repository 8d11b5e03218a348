"""Video record model (owned by the video catalogue, read by this service)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Uploaded video with its owner.

    Fields
    ------
    video_file : str
        Media store URL of the video asset.
    thumbnail : str
        Media store URL of the thumbnail.
    owner_id : int
        FK to :class:`User`.
    title : str
        Indexed title.
    description : str
        Free text description.
    duration : float
        Length in seconds.
    views : int
        View counter (defaults to 0).
    is_published : bool
        Visibility flag (defaults to ``True``).
    """

    __tablename__ = "videos"
    __repr_attrs__ = ("title", "owner_id")

    video_file: Mapped[str] = mapped_column(String(512), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(512), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[User] = relationship(back_populates="videos")
