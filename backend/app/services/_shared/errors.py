"""
Service-layer exceptions.

Nothing here knows about Flask. Each class carries the ``status_code`` the
HTTP layer (:mod:`app.core.errors`) answers with, and its ``message`` is safe
to show to clients.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Tell whether ``exc`` was raised by the unique key ``constraint_name``.

    PostgreSQL names the constraint in its message. SQLite only names the
    column (``UNIQUE constraint failed: users.email``), so ``uq_users_email``
    is also matched as ``users.email``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table, _, column = name[3:].partition("_")
        return bool(column) and f"{table}.{column}" in message
    return False


class ServiceError(Exception):
    """Root of the service errors; defaults to 400."""

    status_code: int = 400

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(ServiceError):
    """Missing or blank required input.

    :param message: Human-readable summary.
    :param fields: Offending field names, if known.
    """

    status_code = 400

    def __init__(self, message: str, *, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class AuthError(ServiceError):
    """Bad credentials, bad/expired/mismatched token or missing session."""

    status_code = 401


class UploadError(ServiceError):
    """The external media store did not return a stored object."""

    status_code = 502


class InternalError(ServiceError):
    """A post-write invariant did not hold."""

    status_code = 500


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Lookup miss, rendered as ``"<entity> not found: <key>"``.

    :param entity: Kind of thing looked up (``"User"``, ``"Channel"``).
    :param key: Identifier the caller searched with.
    """

    entity: str
    key: str | int

    status_code = 404

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    A username or email that belongs to someone else.

    :param entity: Kind of record in conflict.
    :param detail: Client-facing message, used verbatim.
    """

    entity: str
    detail: str

    status_code = 409

    def __str__(self) -> str:
        return self.detail
