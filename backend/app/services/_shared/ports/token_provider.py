from __future__ import annotations

from typing import Literal, Protocol

TokenKind = Literal["access", "refresh"]

ACCESS: TokenKind = "access"
REFRESH: TokenKind = "refresh"


class TokenVerificationError(Exception):
    """Token is malformed, expired, badly signed or of the wrong kind."""


class TokenProvider(Protocol):
    """Port for issuing and verifying the access/refresh token pair.

    Each kind is signed with its own secret and lifetime. ``verify`` raises
    :class:`TokenVerificationError` for every failure mode and nothing else.
    """

    def issue_access(self, user_id: int) -> str: ...

    def issue_refresh(self, user_id: int) -> str: ...

    def verify(self, token: str, kind: TokenKind) -> int: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, tuple[TokenKind, int]] = {}
        self._expired: set[str] = set()

    def _mk(self, kind: TokenKind, user_id: int) -> str:
        self._seq += 1
        token = f"{kind}.{user_id}.{self._seq}"
        self._issued[token] = (kind, int(user_id))
        return token

    def issue_access(self, user_id: int) -> str:
        return self._mk(ACCESS, user_id)

    def issue_refresh(self, user_id: int) -> str:
        return self._mk(REFRESH, user_id)

    def expire(self, token: str) -> None:
        """Make ``token`` fail verification as if its lifetime had elapsed."""
        self._expired.add(token)

    def verify(self, token: str, kind: TokenKind) -> int:
        issued = self._issued.get(token)
        if issued is None:
            raise TokenVerificationError("Malformed token")
        if token in self._expired:
            raise TokenVerificationError("Token expired")
        issued_kind, user_id = issued
        if issued_kind != kind:
            raise TokenVerificationError(f"Expected {kind} token")
        return user_id
