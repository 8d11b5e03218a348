"""
Units of work over the Flask-scoped SQLAlchemy session.

Both flavours hand out the same three repositories bound to ``db.session``:

* :class:`SQLAlchemyUnitOfWork` commits on a clean exit, rolls back otherwise.
* :class:`SQLAlchemyReadOnlyUnitOfWork` never commits and refuses to flush
  pending ORM changes.
"""

from __future__ import annotations

import logging

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.extensions import db
from app.repositories import (
    SubscriptionRepository,
    UserRepository,
    WatchHistoryRepository,
)
from app.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class _SessionScope(UnitOfWork):
    """Bind every repository to one session."""

    def __init__(self) -> None:
        self.session = db.session
        self.users = UserRepository(session=self.session)
        self.subscriptions = SubscriptionRepository(session=self.session)
        self.watch_history = WatchHistoryRepository(session=self.session)

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyUnitOfWork(_SessionScope):
    """Read-write scope: all changes of a use case land together or not at all."""

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except SQLAlchemyError:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()


class SQLAlchemyReadOnlyUnitOfWork(_SessionScope):
    """
    Read-only scope.

    On PostgreSQL and MySQL/MariaDB the transaction is opened with
    ``SET TRANSACTION READ ONLY``. Everywhere, a ``before_flush`` listener
    rejects new/dirty/deleted objects, and the scope always ends in a rollback.

    .. warning::
       The rollback expires every instance loaded inside the block. Copy what
       you need into DTOs before leaving it.
    """

    _READ_ONLY_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})

    def __init__(self, *, enforce_db_readonly: bool = True) -> None:
        super().__init__()
        self.enforce_db_readonly = enforce_db_readonly
        self._guarded: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # db.session is a scoped_session proxy; transaction state and event
        # listeners live on the concrete Session behind it
        self._guarded = self.session() if callable(self.session) else self.session
        if self.enforce_db_readonly:
            self._set_read_only(self._guarded)
        event.listen(self._guarded, "before_flush", self._reject_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            if self._guarded is not None:
                event.remove(self._guarded, "before_flush", self._reject_flush)
                self._guarded = None

    def _set_read_only(self, session: Session) -> None:
        # Only legal as the first statement of a transaction
        if session.in_transaction():
            return
        if session.get_bind().dialect.name not in self._READ_ONLY_DIALECTS:
            return
        try:
            session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            session.rollback()
            log.warning("uow.read_only_unavailable", extra={"code": type(exc).__name__})

    @staticmethod
    def _reject_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only unit of work cannot flush pending changes.")

    def commit(self) -> None:
        """
        :raises RuntimeError: always; this scope never writes.
        """
        raise RuntimeError("Read-only unit of work cannot commit.")
