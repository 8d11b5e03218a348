"""Centralized JSON error handling rendering the API response envelope.

Every failure leaves the API as::

    {"statusCode": 409, "data": null, "message": "...", "success": false,
     "errors": {...}, "requestId": "..."}

``errors`` is only present when structured details exist.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from app.core.logger import ensure_request_id
from app.services._shared.errors import ServiceError, ValidationError

log = logging.getLogger(__name__)


def _status_code_name(status: int) -> str:
    """``409`` → ``"conflict"``; unknown statuses → ``"error"``."""
    try:
        return HTTPStatus(status).name.lower()
    except ValueError:
        return "error"


def error_envelope(
    *,
    status: int,
    message: str,
    errors: dict[str, Any] | list[Any] | None = None,
) -> dict[str, Any]:
    """
    Build the failure envelope.

    :param status: HTTP status code.
    :param message: Client-safe summary.
    :param errors: Structured details; omitted from the body when empty.
    """
    body: dict[str, Any] = {
        "statusCode": int(status),
        "data": None,
        "message": message,
        "success": False,
    }
    if errors:
        body["errors"] = errors
    body["requestId"] = ensure_request_id()
    return body


def error_response(
    status: int,
    message: str,
    errors: dict[str, Any] | list[Any] | None = None,
) -> tuple[Response, int]:
    return jsonify(error_envelope(status=status, message=message, errors=errors)), int(status)


class APIError(Exception):
    """Error raised by route code (as opposed to services).

    :param message: Client-safe summary.
    :param status_code: HTTP status, 400 unless given.
    :param details: Rendered under ``errors`` when non-empty.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.details = details or {}


class Unauthorized(APIError):
    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


def _log(source: str, status: int, message: str, *, exc_info: bool = False) -> None:
    code = _status_code_name(status)
    emit = log.error if status >= 500 else log.warning
    emit(
        "%s %s: %s",
        source,
        status,
        message,
        extra={"status_code": status, "code": code},
        exc_info=exc_info,
    )


def init_app(app: Flask) -> None:
    """
    Register the JSON error handlers.

    Client errors are logged as warnings without a traceback. Server errors
    are logged as errors with one, and their message never reaches the client
    unless it came from a :class:`ServiceError`.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status = int(err.status_code)
        errors = None
        if isinstance(err, ValidationError) and err.fields:
            errors = {name: ["Field is required."] for name in err.fields}
        _log(type(err).__name__, status, err.message, exc_info=status >= 500)
        return error_response(status, err.message, errors)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log("APIError", err.status_code, err.message)
        return error_response(err.status_code, err.message, err.details)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        _log("HTTPException", status, message)
        return error_response(status, message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        _log("ValidationError", HTTPStatus.BAD_REQUEST, "Validation failed")
        return error_response(HTTPStatus.BAD_REQUEST, "Validation failed", messages)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # A unique/foreign-key violation the service did not anticipate
        _log("IntegrityError", HTTPStatus.CONFLICT, "Resource conflict", exc_info=True)
        return error_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        message = "Service temporarily unavailable"
        _log("OperationalError", HTTPStatus.SERVICE_UNAVAILABLE, message, exc_info=True)
        return error_response(HTTPStatus.SERVICE_UNAVAILABLE, message)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        _log(type(err).__name__, HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error", exc_info=True)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")
