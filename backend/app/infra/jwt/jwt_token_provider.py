# app/infra/jwt/jwt_token_provider.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from app.services._shared.ports import (
    ACCESS,
    REFRESH,
    TokenKind,
    TokenProvider,
    TokenVerificationError,
)

_REFRESH_ALGORITHM = "HS256"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Token adapter backed by Flask-JWT-Extended and PyJWT.

    Access tokens are minted by Flask-JWT-Extended so ``@jwt_required`` routes
    accept them as-is. Refresh tokens are signed directly with PyJWT using
    ``REFRESH_TOKEN_SECRET``, a key distinct from the access secret, so one
    kind can never be replayed as the other.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def issue_access(self, user_id: int) -> str:
        return cast(str, create_access_token(identity=str(user_id)))

    def issue_refresh(self, user_id: int) -> str:
        cfg = current_app.config
        now = datetime.now(UTC)
        lifetime = cast(timedelta, cfg["REFRESH_TOKEN_EXPIRY"])
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "type": REFRESH,
            # Unique per issue so two refreshes in the same second still differ
            "jti": uuid.uuid4().hex,
            "iat": now,
            "nbf": now,
            "exp": now + lifetime,
        }
        return pyjwt.encode(claims, cfg["REFRESH_TOKEN_SECRET"], algorithm=_REFRESH_ALGORITHM)

    def verify(self, token: str, kind: TokenKind) -> int:
        """
        Decode ``token`` as ``kind`` and return its subject.

        :raises TokenVerificationError: On any decoding or claim failure.
        """
        claims = self._decode(token, kind)
        if claims.get("type") != kind:
            raise TokenVerificationError(f"Expected {kind} token")
        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenVerificationError("Token subject is invalid") from exc

    def _decode(self, token: str, kind: TokenKind) -> dict[str, Any]:
        try:
            if kind == ACCESS:
                return cast(dict[str, Any], decode_token(token))
            return cast(
                dict[str, Any],
                pyjwt.decode(
                    token,
                    current_app.config["REFRESH_TOKEN_SECRET"],
                    algorithms=[_REFRESH_ALGORITHM],
                    options={"require": ["exp", "sub"]},
                ),
            )
        except (pyjwt.PyJWTError, JWTExtendedException) as exc:
            raise TokenVerificationError(str(exc)) from exc
