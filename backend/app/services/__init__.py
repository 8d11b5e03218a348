"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`app.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``app.services._shared.base``)
    * :class:`BaseService`

- Shared DTOs (from ``app.services._shared.dto``)
    * :class:`PaginationIn`
    * :class:`PageMeta`

- Auth service (from ``app.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`ChangePasswordIn`,
      :class:`UserPublicOut`, :class:`LoginOut`, :class:`TokenPairOut`

- Profile service (from ``app.services.profile``)
    * :class:`ProfileService`
    * DTOs: :class:`UpdateProfileIn`, :class:`UpdateMediaIn`

- Channel service (from ``app.services.channels``)
    * :class:`ChannelService`
    * DTOs: :class:`ChannelProfileOut`, :class:`WatchHistoryOut`,
      :class:`WatchedVideoOut`, :class:`VideoOwnerOut`
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.dto import PageMeta, PaginationIn
from .auth.dto import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RegisterIn,
    TokenPairOut,
    UserPublicOut,
)
from .auth.service import AuthService
from .channels.dto import (
    ChannelProfileOut,
    VideoOwnerOut,
    WatchedVideoOut,
    WatchHistoryOut,
)
from .channels.service import ChannelService
from .profile.dto import UpdateMediaIn, UpdateProfileIn
from .profile.service import ProfileService

__all__ = [
    # Base
    "BaseService",
    # Shared DTOs
    "PaginationIn",
    "PageMeta",
    # Auth
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "ChangePasswordIn",
    "UserPublicOut",
    "LoginOut",
    "TokenPairOut",
    # Profile
    "ProfileService",
    "UpdateProfileIn",
    "UpdateMediaIn",
    # Channels
    "ChannelService",
    "ChannelProfileOut",
    "WatchHistoryOut",
    "WatchedVideoOut",
    "VideoOwnerOut",
]
