"""Directed subscriber → channel edges between users."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Subscription(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    ``subscriber`` follows ``channel``. Both ends are users.

    At most one edge exists per ``(subscriber, channel)`` pair. Edges are
    maintained elsewhere; this service only counts them.
    """

    __tablename__ = "subscriptions"
    __repr_attrs__ = ("subscriber_id", "channel_id")

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    channel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="no_self_subscription"),
    )
