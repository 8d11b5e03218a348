"""Watch history queries joining videos and their owners."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import aliased

from app.models.user import User
from app.models.video import Video
from app.models.watch_history import WatchHistoryEntry
from app.repositories.base import BaseRepository, Pagination, paginate_rows


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """Persistence-only access to :class:`WatchHistoryEntry` rows."""

    model = WatchHistoryEntry

    def _history_stmt(self, user_id: int) -> Select[Any]:
        owner = aliased(User, name="owner")
        return (
            select(
                WatchHistoryEntry.id.label("entry_id"),
                WatchHistoryEntry.watched_at,
                Video,
                owner.full_name.label("owner_full_name"),
                owner.username.label("owner_username"),
                owner.avatar_url.label("owner_avatar_url"),
            )
            .join(Video, Video.id == WatchHistoryEntry.video_id)
            .outerjoin(owner, owner.id == Video.owner_id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.id.asc())
        )

    def list_for_user(self, user_id: int) -> Sequence[Any]:
        """Return the user's history rows in view order.

        Each row exposes ``entry_id``, ``watched_at``, ``Video`` and the three
        projected owner columns. Duplicate views yield duplicate rows.
        """
        return list(self.session.execute(self._history_stmt(user_id)).all())

    def page_for_user(self, user_id: int, pagination: Pagination) -> tuple[list[Any], int]:
        """Paginated variant of :meth:`list_for_user` returning ``(rows, total)``."""
        return paginate_rows(self.session, self._history_stmt(user_id), pagination)
