# app/services/channels/service.py
"""
ChannelService
==============

Read-only aggregations over users, subscription edges and watch history:

- channel profile: one user plus subscriber/subscription counts and whether
  the viewer follows them;
- watch history: the user's viewed videos, in order, joined with a narrow
  owner projection.
"""

from __future__ import annotations

from typing import Any

from app.services._shared.base import BaseService
from app.services._shared.dto import PageMeta, PaginationIn
from app.services._shared.errors import AuthError, NotFoundError
from app.services._shared.policies.common import require_non_blank
from app.services.channels.dto import (
    ChannelProfileOut,
    VideoOwnerOut,
    WatchedVideoOut,
    WatchHistoryOut,
)


def _history_item(row: Any) -> WatchedVideoOut:
    video = row.Video
    owner = None
    if row.owner_username is not None:
        owner = VideoOwnerOut(
            full_name=row.owner_full_name,
            username=row.owner_username,
            avatar_url=row.owner_avatar_url,
        )
    return WatchedVideoOut(
        id=video.id,
        video_file=video.video_file,
        thumbnail=video.thumbnail,
        title=video.title,
        description=video.description,
        duration=video.duration,
        views=video.views,
        is_published=video.is_published,
        created_at=video.created_at,
        watched_at=row.watched_at,
        owner=owner,
    )


class ChannelService(BaseService):
    """Application service for channel and history read models."""

    def get_channel_profile(
        self, username: str | None, *, viewer_id: int | None = None
    ) -> ChannelProfileOut:
        """
        Build the channel header for ``username``.

        :param username: Channel handle, matched case-insensitively.
        :param viewer_id: Authenticated viewer, or ``None`` when anonymous.
        :raises ValidationError: Blank username.
        :raises NotFoundError: No such channel.
        """
        require_non_blank("username is missing", username=username)

        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("Channel", username.strip())
            subs = uow.subscriptions
            return ChannelProfileOut(
                full_name=user.full_name,
                username=user.username,
                subscriber_count=subs.count_subscribers(user.id),
                subscribed_to_count=subs.count_subscriptions(user.id),
                is_subscribed=subs.is_subscribed(subscriber_id=viewer_id, channel_id=user.id),
                avatar_url=user.avatar_url,
                cover_image_url=user.cover_image_url or "",
            )

    def get_watch_history(
        self, user_id: int | None, *, pagination: PaginationIn | None = None
    ) -> WatchHistoryOut:
        """
        Return the user's watch history in view order.

        An empty history yields an empty ``items`` list.

        :param user_id: Authenticated user.
        :param pagination: Optional page/limit; the full history otherwise.
        :raises AuthError: No identity, or the user no longer exists.
        """
        if user_id is None:
            raise AuthError("Unauthorized request")

        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise AuthError("Unauthorized request")

            if pagination is None:
                rows = uow.watch_history.list_for_user(user_id)
                return WatchHistoryOut(items=[_history_item(r) for r in rows])

            page = self.to_pagination(pagination)
            rows, total = uow.watch_history.page_for_user(user_id, page)
            return WatchHistoryOut(
                items=[_history_item(r) for r in rows],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=total),
            )
