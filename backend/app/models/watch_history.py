"""Ordered watch history entries (user → video)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.extensions import db

from .base import PKMixin, ReprMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class WatchHistoryEntry(PKMixin, ReprMixin, db.Model):
    """
    One view of ``video`` by ``user``.

    The surrogate ``id`` is monotonic, so ordering by it yields view order.
    Repeated views of the same video produce repeated entries.
    """

    __tablename__ = "watch_history"
    __repr_attrs__ = ("user_id", "video_id")

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    user: Mapped[User] = relationship(back_populates="watch_history")
    video: Mapped[Video] = relationship()
