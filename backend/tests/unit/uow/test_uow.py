# tests/unit/uow/test_uow.py
from __future__ import annotations

import pytest
from app.models.user import User
from app.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from app.uow import SQLAlchemyUnitOfWork as RWuow
from sqlalchemy import text
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, session):
        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        session.expire_all()
        assert session.query(User).count() == 1

    def test_rolls_back_on_error(self, session):
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")
        assert session.query(User).count() == 0


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, db):
        with ROuow() as uow, pytest.raises(RuntimeError, match="cannot flush"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_allows_reads(self, db):
        user = UserFactory(username="reader")
        with ROuow() as uow:
            assert uow.users.get_by_username("reader").id == user.id

    def test_commit_is_refused(self, db):
        with ROuow() as uow, pytest.raises(RuntimeError):
            uow.commit()

    def test_guard_removed_after_exit(self, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        assert session.query(User).count() == 1

    def test_enters_on_idle_and_open_session(self, session):
        # Idle scoped session first, then one whose transaction is already open
        with ROuow() as uow:
            assert uow.users.count() == 0
        session.execute(text("SELECT 1"))
        with ROuow(enforce_db_readonly=True) as uow:
            assert uow.users.count() == 0
