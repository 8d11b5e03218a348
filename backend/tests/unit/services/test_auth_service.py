# tests/unit/services/test_auth_service.py
from __future__ import annotations

import pytest
from app.core.security import hash_refresh_token
from app.models.user import User
from app.services._shared.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from app.services._shared.ports import InMemoryMediaStore, StubTokenProvider
from app.services.auth.dto import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RegisterIn,
    TokenPairOut,
    UserPublicOut,
)
from app.services.auth.service import AuthService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store() -> InMemoryMediaStore:
    return InMemoryMediaStore()


@pytest.fixture()
def service(store) -> AuthService:
    """Build an AuthService wired to in-memory doubles."""
    return AuthService(token_provider=StubTokenProvider(), media_store=store)


def _register_in(image_file, **overrides) -> RegisterIn:
    data = {
        "username": "alice",
        "email": "a@x.com",
        "full_name": "Alice A",
        "password": "p1",
        "avatar_path": image_file("avatar.png"),
        "cover_path": None,
    }
    data.update(overrides)
    return RegisterIn(**data)


# ------------------------------ Register ---------------------------------- #
class TestRegister:
    def test_creates_user_with_avatar_and_empty_cover(self, service, store, session, image_file):
        out = service.register(_register_in(image_file, username="Alice"))

        assert isinstance(out, UserPublicOut)
        assert out.username == "alice"
        assert out.avatar_url.startswith(store.base_url)
        assert out.cover_image_url == ""

        row = session.get(User, out.id)
        assert row is not None
        assert row.verify_password("p1")
        assert row.refresh_token_hash is None

    def test_output_never_exposes_credentials(self, service, image_file):
        out = service.register(_register_in(image_file))
        assert not hasattr(out, "password_hash")
        assert not hasattr(out, "refresh_token_hash")

    def test_stores_cover_when_given(self, service, store, image_file):
        out = service.register(
            _register_in(image_file, cover_path=image_file("cover.jpg"))
        )
        assert out.cover_image_url.endswith("cover.jpg")
        assert len(store.calls) == 2

    def test_cover_upload_failure_is_not_fatal(self, service, store, image_file):
        store.fail_names.add("cover.jpg")
        out = service.register(
            _register_in(image_file, cover_path=image_file("cover.jpg"))
        )
        assert out.cover_image_url == ""

    @pytest.mark.parametrize("field", ["username", "email", "full_name", "password"])
    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_fields_rejected(self, service, store, image_file, field, blank):
        with pytest.raises(ValidationError) as exc:
            service.register(_register_in(image_file, **{field: blank}))
        assert exc.value.message == "All fields are required"
        assert field in exc.value.fields
        assert store.calls == []

    def test_duplicate_username_conflicts(self, service, store, session, image_file):
        UserFactory(username="alice", email="other@x.com")

        with pytest.raises(ConflictError):
            service.register(_register_in(image_file, username="ALICE"))
        assert store.calls == []
        assert session.query(User).count() == 1

    def test_duplicate_email_conflicts(self, service, image_file):
        UserFactory(username="someone", email="a@x.com")
        with pytest.raises(ConflictError):
            service.register(_register_in(image_file, email="A@X.com"))

    def test_conflict_checked_before_missing_avatar(self, service, image_file):
        UserFactory(username="alice")
        with pytest.raises(ConflictError):
            service.register(_register_in(image_file, avatar_path=None))

    def test_missing_avatar_rejected(self, service, store, session, image_file):
        with pytest.raises(ValidationError) as exc:
            service.register(_register_in(image_file, avatar_path=None))
        assert exc.value.fields == ["avatar"]
        assert session.query(User).count() == 0
        assert store.calls == []

    def test_input_errors_precede_missing_store(self, session, image_file):
        bare = AuthService(token_provider=StubTokenProvider())
        with pytest.raises(ValidationError):
            bare.register(_register_in(image_file, avatar_path=None))
        with pytest.raises(RuntimeError):
            bare.register(_register_in(image_file))

    def test_falls_back_to_app_media_store(self, media_store, session, image_file):
        out = AuthService(token_provider=StubTokenProvider()).register(_register_in(image_file))
        assert out.avatar_url.startswith(media_store.base_url)

    def test_avatar_upload_failure(self, service, store, session, image_file):
        store.fail_all = True
        with pytest.raises(UploadError):
            service.register(_register_in(image_file))
        assert session.query(User).count() == 0

    def test_malformed_email_rejected(self, service, session, image_file):
        with pytest.raises(ValidationError):
            service.register(_register_in(image_file, email="not-an-email"))
        assert session.query(User).count() == 0


# -------------------------------- Login ----------------------------------- #
class TestLogin:
    def test_login_by_username_issues_pair_and_stores_digest(self, service, session):
        user = UserFactory(username="bob")

        out = service.login(LoginIn(username="BOB", password=DEFAULT_PASSWORD))

        assert isinstance(out, LoginOut)
        assert out.user.id == user.id
        assert out.access_token.startswith("access.")
        assert out.refresh_token.startswith("refresh.")
        session.expire_all()
        assert session.get(User, user.id).refresh_token_hash == hash_refresh_token(
            out.refresh_token
        )

    def test_login_by_email(self, service):
        user = UserFactory(email="carol@x.com")
        out = service.login(LoginIn(email="Carol@X.com", password=DEFAULT_PASSWORD))
        assert out.user.id == user.id

    def test_login_replaces_previous_session(self, service, session):
        user = UserFactory()
        first = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))
        second = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))

        assert first.refresh_token != second.refresh_token
        with pytest.raises(AuthError):
            service.refresh(first.refresh_token)

    def test_requires_an_identifier(self, service):
        with pytest.raises(ValidationError):
            service.login(LoginIn(password="x", username="  ", email=None))

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.login(LoginIn(username="ghost", password="x"))

    def test_wrong_password_keeps_existing_session(self, service, session):
        user = UserFactory()
        good = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))

        with pytest.raises(AuthError):
            service.login(LoginIn(username=user.username, password="wrong"))

        session.expire_all()
        assert session.get(User, user.id).refresh_token_hash == hash_refresh_token(
            good.refresh_token
        )


# ------------------------------- Refresh ---------------------------------- #
class TestRefresh:
    def test_rotates_and_blocks_reuse(self, service):
        user = UserFactory()
        login = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))

        pair = service.refresh(login.refresh_token)
        assert isinstance(pair, TokenPairOut)
        assert pair.refresh_token != login.refresh_token

        with pytest.raises(AuthError):
            service.refresh(login.refresh_token)

        # The rotated token keeps working
        assert service.refresh(pair.refresh_token).refresh_token != pair.refresh_token

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_missing_token(self, service, token):
        with pytest.raises(AuthError):
            service.refresh(token)

    def test_garbage_token(self, service):
        with pytest.raises(AuthError):
            service.refresh("not-a-token")

    def test_access_token_not_accepted(self, service):
        user = UserFactory()
        login = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))
        with pytest.raises(AuthError):
            service.refresh(login.access_token)

    def test_expired_token(self, service):
        user = UserFactory()
        login = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))
        service.tokens.expire(login.refresh_token)
        with pytest.raises(AuthError):
            service.refresh(login.refresh_token)

    def test_rejected_after_logout(self, service):
        user = UserFactory()
        login = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))
        service.logout(user.id)
        with pytest.raises(AuthError):
            service.refresh(login.refresh_token)

    def test_rejected_when_user_gone(self, service, session):
        user = UserFactory()
        login = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))
        session.delete(session.get(User, user.id))
        session.commit()
        with pytest.raises(AuthError):
            service.refresh(login.refresh_token)


# -------------------------------- Logout ---------------------------------- #
class TestLogout:
    def test_clears_digest_and_is_idempotent(self, service, session):
        user = UserFactory()
        service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))

        service.logout(user.id)
        service.logout(user.id)

        session.expire_all()
        assert session.get(User, user.id).refresh_token_hash is None


# ---------------------------- Change password ----------------------------- #
class TestChangePassword:
    def test_replaces_password(self, service, session):
        user = UserFactory()
        service.change_password(
            ChangePasswordIn(user_id=user.id, old_password=DEFAULT_PASSWORD, new_password="n3w")
        )
        session.expire_all()
        row = session.get(User, user.id)
        assert row.verify_password("n3w")
        assert not row.verify_password(DEFAULT_PASSWORD)

    def test_wrong_old_password(self, service, session):
        user = UserFactory()
        with pytest.raises(AuthError):
            service.change_password(
                ChangePasswordIn(user_id=user.id, old_password="nope", new_password="n3w")
            )
        session.expire_all()
        assert session.get(User, user.id).verify_password(DEFAULT_PASSWORD)

    def test_existing_refresh_session_survives(self, service):
        user = UserFactory()
        login = service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD))
        service.change_password(
            ChangePasswordIn(user_id=user.id, old_password=DEFAULT_PASSWORD, new_password="n3w")
        )
        assert service.refresh(login.refresh_token).access_token

    @pytest.mark.parametrize("old,new", [("", "n3w"), (DEFAULT_PASSWORD, " ")])
    def test_blank_passwords(self, service, old, new):
        user = UserFactory()
        with pytest.raises(ValidationError):
            service.change_password(
                ChangePasswordIn(user_id=user.id, old_password=old, new_password=new)
            )

    def test_unknown_user(self, service):
        with pytest.raises(AuthError):
            service.change_password(
                ChangePasswordIn(user_id=9999, old_password="a", new_password="b")
            )
