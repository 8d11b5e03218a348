"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .common import MetaSchema, PaginationQuerySchema
from .user import (
    ChannelProfileSchema,
    UpdateProfileSchema,
    UserSchema,
    VideoOwnerSchema,
    WatchedVideoSchema,
    WatchHistoryPageSchema,
)

__all__ = [
    "ChangePasswordSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "RefreshSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "PaginationQuerySchema",
    "MetaSchema",
    "ChannelProfileSchema",
    "UpdateProfileSchema",
    "UserSchema",
    "VideoOwnerSchema",
    "WatchedVideoSchema",
    "WatchHistoryPageSchema",
]
