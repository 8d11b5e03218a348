"""
Abstract Unit of Work contract shared by the account services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.repositories import (
        SubscriptionRepository,
        UserRepository,
        WatchHistoryRepository,
    )


class UnitOfWork(ABC):
    """
    One transactional boundary per use case.

    Every repository exposed here shares the same session, so a use case sees
    its own uncommitted writes and either persists all of them or none.

    :ivar users: Credential store (accounts, password hash, refresh digest).
    :ivar subscriptions: Subscriber → channel edges.
    :ivar watch_history: Ordered user → video views.
    """

    users: UserRepository
    subscriptions: SubscriptionRepository
    watch_history: WatchHistoryRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
