"""Declarative input policies shared by services."""

from __future__ import annotations

from app.services._shared.errors import ValidationError


def is_blank(value: object) -> bool:
    """Return ``True`` for ``None`` and strings that are empty once trimmed."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_non_blank(message: str = "All fields are required", **fields: object) -> None:
    """Fail with :class:`ValidationError` when any of ``fields`` is blank.

    Usage::

        require_non_blank(username=dto.username, email=dto.email)

    :raises ValidationError: Listing every blank field name.
    """
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise ValidationError(message, fields=missing)
