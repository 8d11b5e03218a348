"""Subscription edge counting for channel aggregation."""

from __future__ import annotations

from app.models.subscription import Subscription
from app.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Read-side queries over subscriber → channel edges.

    Each query is a single indexed ``COUNT`` or existence probe.
    """

    model = Subscription

    def count_subscribers(self, channel_id: int) -> int:
        """Number of users subscribed to ``channel_id``."""
        return self.count(Subscription.channel_id == channel_id)

    def count_subscriptions(self, subscriber_id: int) -> int:
        """Number of channels ``subscriber_id`` is subscribed to."""
        return self.count(Subscription.subscriber_id == subscriber_id)

    def is_subscribed(self, *, subscriber_id: int | None, channel_id: int) -> bool:
        """Return ``True`` when the edge ``(subscriber_id, channel_id)`` exists.

        An anonymous viewer (``None``) is never subscribed.
        """
        if subscriber_id is None:
            return False
        return self.exists(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
