"""
app.services._shared.ports
==========================

Collection of *ports* (hexagonal interfaces) the services depend on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the access/refresh token contract.

- :mod:`media_store`:
    Defines :class:`~.MediaStore`, the external media host contract.

Concrete adapters live under ``app.infra``; the in-memory doubles here are
used by the test suite.
"""

from __future__ import annotations

from .media_store import InMemoryMediaStore, MediaStore, StoredMedia
from .token_provider import (
    ACCESS,
    REFRESH,
    StubTokenProvider,
    TokenKind,
    TokenProvider,
    TokenVerificationError,
)

__all__ = [
    "ACCESS",
    "REFRESH",
    "InMemoryMediaStore",
    "MediaStore",
    "StoredMedia",
    "StubTokenProvider",
    "TokenKind",
    "TokenProvider",
    "TokenVerificationError",
]
