"""Repository base class and the page executor shared by list queries.

Repositories only read and stage writes. They flush so database defaults and
primary keys materialize, but never commit or roll back: the unit of work
owns the transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from app.core.extensions import db

ModelT = TypeVar("ModelT")


@dataclass(frozen=True, slots=True)
class Pagination:
    """Validated page window (``page`` and ``limit`` are both >= 1)."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate_rows(
    session: Session,
    stmt: Select[Any],
    pagination: Pagination,
) -> tuple[list[Any], int]:
    """Run ``stmt`` for one page and count every row it would return.

    The count drops ``ORDER BY``. Rows come back as :class:`sqlalchemy.Row`,
    so multi-column selects keep their labels.

    :returns: ``(rows, total)``
    """
    total = session.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    page = session.execute(stmt.limit(pagination.limit).offset(pagination.offset))
    return list(page.all()), int(total)


class BaseRepository(Generic[ModelT]):
    """Persistence helpers for one mapped model.

    Subclasses set :attr:`model` and list in :attr:`updatable` the columns
    that :meth:`assign_updates` may touch. Credential columns never belong
    there.
    """

    model: type[ModelT]
    updatable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The unit of work's session, or the Flask-scoped one."""
        return self._session if self._session is not None else cast(Session, db.session)

    def flush(self) -> None:
        self.session.flush()

    # Reads

    def get(self, entity_id: int) -> ModelT | None:
        """Load by primary key, ``None`` when absent."""
        stmt = select(self.model).where(self.model.id == entity_id)  # type: ignore[attr-defined]
        return cast(ModelT | None, self.session.execute(stmt).scalars().first())

    def exists(self, *criteria: Any) -> bool:
        """``True`` when any row satisfies ``criteria``."""
        stmt = select(self.model.id).where(*criteria).limit(1)  # type: ignore[attr-defined]
        return self.session.execute(stmt).first() is not None

    def count(self, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return int(self.session.execute(stmt).scalar_one())

    # Writes

    def add(self, instance: ModelT) -> ModelT:
        """Stage ``instance`` and flush so its ``id`` is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def assign_updates(self, instance: ModelT, fields: Mapping[str, Any]) -> ModelT:
        """Set whitelisted attributes through the model's validators, then flush.

        :raises ValueError: A key outside :attr:`updatable`.
        """
        rejected = sorted(set(fields) - self.updatable)
        if rejected:
            raise ValueError(f"Fields not updatable: {rejected}")
        for name, value in fields.items():
            setattr(instance, name, value)
        self.flush()
        return instance
