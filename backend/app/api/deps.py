"""Route helpers: auth guards, pagination parsing and the success envelope."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from app.core.errors import Unauthorized
from app.models.user import User
from app.schemas.common import PaginationQuerySchema
from app.services._shared.dto import PaginationIn

F = TypeVar("F", bound=Callable[..., Any])


def parse_pagination(default_limit: int = 20, max_limit: int = 100) -> PaginationIn | None:
    """Parse optional ``page``/``limit`` from ``request.args``.

    Returns ``None`` when the client asked for neither.
    """

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    if not data:
        return None
    return PaginationIn(page=data["page"], limit=data["limit"])


def require_auth(func: F) -> F:
    """401 unless the request carries a valid access token of a live user."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    """Id of the user resolved by :func:`require_auth`."""

    user: User | None = get_current_user()
    if user is None:
        raise Unauthorized()
    return int(user.id)


def viewer_id() -> int | None:
    """Id of the signed-in caller on a public route, ``None`` for anonymous.

    A missing, expired, malformed or wrong-type token, or one whose user is
    gone, makes the caller anonymous instead of failing the request.
    """

    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None
    user: User | None = get_current_user()
    return None if user is None else int(user.id)


def success_response(data: Any, message: str = "Success", *, status: int = 200) -> Response:
    """``{statusCode, data, message, success: true}`` with ``status`` as HTTP code."""

    response = jsonify(
        {"statusCode": int(status), "data": data, "message": message, "success": True}
    )
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Log handler duration at DEBUG as ``request.elapsed``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            current_app.logger.debug(
                "request.elapsed",
                extra={
                    "endpoint": request.endpoint,
                    "method": request.method,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )

    return wrapper  # type: ignore[return-value]
