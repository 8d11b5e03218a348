"""Factory Boy definition for subscription edges."""

from __future__ import annotations

from app.models.subscription import Subscription

import factory
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class SubscriptionFactory(BaseFactory):
    """Edge ``subscriber`` → ``channel``; pass ids of existing users."""

    class Meta:
        model = Subscription

    id = None
    subscriber_id = factory.LazyFunction(lambda: UserFactory().id)
    channel_id = factory.LazyFunction(lambda: UserFactory().id)
