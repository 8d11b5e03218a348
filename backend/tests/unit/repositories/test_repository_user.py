# tests/unit/repositories/test_repository_user.py
from __future__ import annotations

import pytest
from app.core.security import hash_refresh_token
from app.models.user import User
from app.repositories.user import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


class TestUserRepository:
    def test_get_by_username_is_case_insensitive(self, repo):
        user = UserFactory(username="Frank")
        assert repo.get_by_username(" FRANK ").id == user.id
        assert repo.get_by_username("nobody") is None

    def test_get_by_email_normalizes(self, repo):
        user = UserFactory(email="grace@x.com")
        assert repo.get_by_email("Grace@X.com").id == user.id

    def test_find_by_username_or_email_matches_either(self, repo):
        a = UserFactory(username="heidi", email="heidi@x.com")
        assert repo.find_by_username_or_email(username="heidi").id == a.id
        assert repo.find_by_username_or_email(email="HEIDI@x.com").id == a.id
        assert repo.find_by_username_or_email(username="nope", email="heidi@x.com").id == a.id

    def test_find_with_blank_identifiers(self, repo):
        UserFactory()
        assert repo.find_by_username_or_email(username="  ", email=None) is None

    def test_exists_by_username_or_email(self, repo):
        UserFactory(username="ivan", email="ivan@x.com")
        assert repo.exists_by_username_or_email(username="ivan", email="zzz@x.com")
        assert repo.exists_by_username_or_email(username="zzz", email="IVAN@x.com")
        assert not repo.exists_by_username_or_email(username="zzz", email="zzz@x.com")

    def test_email_taken_by_other(self, repo):
        a = UserFactory(email="judy@x.com")
        b = UserFactory()
        assert repo.email_taken_by_other("judy@x.com", b.id)
        assert not repo.email_taken_by_other("judy@x.com", a.id)

    def test_assign_updates_rejects_protected_fields(self, repo):
        user = UserFactory()
        with pytest.raises(ValueError):
            repo.assign_updates(user, {"password_hash": "x"})
        with pytest.raises(ValueError):
            repo.assign_updates(user, {"refresh_token_hash": "x"})

    def test_update_password_hashes(self, repo, session):
        user = UserFactory()
        repo.update_password(user, "fresh")
        session.commit()
        session.expire_all()
        row = session.get(User, user.id)
        assert row.password_hash != "fresh"
        assert row.verify_password("fresh")


class TestRefreshTokenDigest:
    def test_set_and_clear(self, repo, session):
        user = UserFactory()
        repo.set_refresh_token_hash(user, hash_refresh_token("rt"))
        session.commit()

        assert repo.clear_refresh_token(user.id) == 1
        session.commit()
        session.expire_all()
        assert session.get(User, user.id).refresh_token_hash is None

    def test_clear_unknown_user_touches_nothing(self, repo):
        assert repo.clear_refresh_token(404) == 0

    def test_rotate_only_when_expected_matches(self, repo, session):
        user = UserFactory()
        old, new = hash_refresh_token("old"), hash_refresh_token("new")
        repo.set_refresh_token_hash(user, old)
        session.commit()

        assert repo.rotate_refresh_token(user.id, expected=old, new=new) is True
        # Second rotation presenting the same stale digest loses
        assert repo.rotate_refresh_token(user.id, expected=old, new=hash_refresh_token("x")) is False
        session.commit()
        session.expire_all()
        assert session.get(User, user.id).refresh_token_hash == new

    def test_rotate_without_session(self, repo):
        user = UserFactory()
        assert repo.rotate_refresh_token(user.id, expected="a" * 64, new="b" * 64) is False
