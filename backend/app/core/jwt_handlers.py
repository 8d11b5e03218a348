"""flask-jwt-extended callbacks resolving users and rendering 401 envelopes."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask_jwt_extended import JWTManager

from app.core.errors import error_response

log = logging.getLogger(__name__)


def _unauthorized(message: str):
    log.warning("auth.rejected: %s", message, extra={"status_code": HTTPStatus.UNAUTHORIZED})
    return error_response(HTTPStatus.UNAUTHORIZED, message)


def register(jwt: JWTManager) -> None:
    """Attach user lookup and error loaders to ``jwt``.

    Secured routes resolve the token subject to a live :class:`User`; a token
    whose user no longer exists is rejected like any other invalid token.
    """

    @jwt.user_lookup_loader
    def _load_user(_jwt_header: dict[str, Any], jwt_data: dict[str, Any]):
        from app.core.extensions import db
        from app.models.user import User

        subject = jwt_data.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    @jwt.user_lookup_error_loader
    def _user_lookup_error(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
        return _unauthorized("Invalid access token")

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthorized("Unauthorized request")

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthorized("Invalid access token")

    @jwt.expired_token_loader
    def _expired_token(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
        return _unauthorized("Access token expired")
