"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from app.repositories.base import (
    BaseRepository,
    Pagination,
    paginate_rows,
)
from app.repositories.subscription import SubscriptionRepository
from app.repositories.user import UserRepository
from app.repositories.watch_history import WatchHistoryRepository

__all__ = [
    # Base
    "BaseRepository",
    "Pagination",
    "paginate_rows",
    # Domain
    "SubscriptionRepository",
    "UserRepository",
    "WatchHistoryRepository",
]
