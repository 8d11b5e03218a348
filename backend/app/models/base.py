"""Column and repr mixins for the account models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    """Provide ``created_at`` and ``updated_at`` timestamp columns.

    Both are filled by the database; ``updated_at`` is refreshed on every
    ORM-issued update (including the conditional refresh-token rotation).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class PKMixin:
    """Integer surrogate key ``id`` shared by every table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class ReprMixin:
    """Render ``<Model id=1 attr=...>`` from the names in ``__repr_attrs__``.

    Never list credential columns here; reprs end up in logs.
    """

    __repr_attrs__ = ()

    def __repr__(self) -> str:
        parts = [f"id={getattr(self, 'id', None)}"]
        parts += [f"{name}={getattr(self, name, None)!r}" for name in self.__repr_attrs__]
        return f"<{type(self).__name__} {' '.join(parts)}>"
