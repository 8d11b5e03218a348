"""Password hashing and token digest helpers."""

from __future__ import annotations

import hashlib
import hmac

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(raw: str) -> str:
    """
    Hash a plaintext password with a salted one-way digest.

    :param raw: Plain text password.
    :type raw: str
    :returns: Encoded hash (method, salt and digest).
    :rtype: str
    :raises ValueError: If ``raw`` is empty or not a string.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(raw)


def verify_password(raw: str, digest: str | None) -> bool:
    """
    Verify a plaintext password against a stored hash.

    :param raw: Plain text password candidate.
    :type raw: str
    :param digest: Stored hash, possibly empty.
    :type digest: str | None
    :returns: ``True`` if it matches; otherwise ``False``.
    :rtype: bool
    """
    if not digest or not isinstance(raw, str) or not raw:
        return False
    return bool(check_password_hash(digest, raw))


def hash_refresh_token(token: str) -> str:
    """Return the SHA-256 hex digest stored in place of a refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def refresh_token_matches(token: str, stored_digest: str | None) -> bool:
    """Exact, constant-time comparison of ``token`` against a stored digest."""
    if not token or not stored_digest:
        return False
    return hmac.compare_digest(hash_refresh_token(token), stored_digest)
