# app/services/channels/dto.py
"""
DTOs for ChannelService aggregation queries.

Owners embedded in history items only expose ``full_name``, ``username`` and
``avatar_url``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.services._shared.dto import PageMeta


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Channel page header for a user.

    :param full_name: Channel owner display name.
    :type full_name: str
    :param username: Channel handle.
    :type username: str
    :param subscriber_count: Users subscribed to this channel.
    :type subscriber_count: int
    :param subscribed_to_count: Channels this user is subscribed to.
    :type subscribed_to_count: int
    :param is_subscribed: Whether the viewer is subscribed (``False`` if anonymous).
    :type is_subscribed: bool
    :param avatar_url: Avatar location.
    :type avatar_url: str
    :param cover_image_url: Cover image location (may be empty).
    :type cover_image_url: str
    """

    full_name: str
    username: str
    subscriber_count: int
    subscribed_to_count: int
    is_subscribed: bool
    avatar_url: str
    cover_image_url: str


@dataclass(frozen=True, slots=True)
class VideoOwnerOut:
    full_name: str
    username: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class WatchedVideoOut:
    """
    One watch-history entry with its video and owner projection.

    :param id: Video identifier.
    :param owner: Projected owner, ``None`` if the owner row is gone.
    :param watched_at: When the entry was recorded.
    """

    id: int
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime | None
    watched_at: datetime | None
    owner: VideoOwnerOut | None


@dataclass(frozen=True, slots=True)
class WatchHistoryOut:
    """
    Watch history in view order.

    :param items: Entries, oldest view first.
    :type items: list[WatchedVideoOut]
    :param meta: Page metadata when pagination was requested.
    :type meta: PageMeta | None
    """

    items: list[WatchedVideoOut]
    meta: PageMeta | None = None
