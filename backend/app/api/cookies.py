"""Token cookie helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from flask import Response

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """
    Attributes applied to both token cookies.

    :param httponly: Hide the cookie from scripts.
    :param secure: Only send over HTTPS.
    :param samesite: ``SameSite`` policy (``"Lax"``, ``"Strict"``, ``"None"``).
    :param path: Cookie path.
    """

    httponly: bool = True
    secure: bool = True
    samesite: str | None = "Lax"
    path: str = "/"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CookieOptions:
        return cls(
            httponly=bool(config.get("COOKIE_HTTPONLY", True)),
            secure=bool(config.get("COOKIE_SECURE", True)),
            samesite=config.get("COOKIE_SAMESITE") or None,
            path=config.get("COOKIE_PATH", "/"),
        )


def _max_age(value: timedelta | None) -> int | None:
    return int(value.total_seconds()) if value is not None else None


def set_token_cookies(
    response: Response,
    *,
    access_token: str,
    refresh_token: str,
    options: CookieOptions,
    access_max_age: timedelta | None = None,
    refresh_max_age: timedelta | None = None,
) -> Response:
    """Attach ``accessToken`` and ``refreshToken`` cookies to ``response``."""
    for name, value, max_age in (
        (ACCESS_COOKIE, access_token, access_max_age),
        (REFRESH_COOKIE, refresh_token, refresh_max_age),
    ):
        response.set_cookie(
            name,
            value,
            max_age=_max_age(max_age),
            httponly=options.httponly,
            secure=options.secure,
            samesite=options.samesite,
            path=options.path,
        )
    return response


def clear_token_cookies(response: Response, *, options: CookieOptions) -> Response:
    """Expire both token cookies."""
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            name,
            path=options.path,
            httponly=options.httponly,
            secure=options.secure,
            samesite=options.samesite,
        )
    return response
