"""Pytest fixtures building an isolated application per test.

Each test gets a fresh app bound to its own in-memory SQLite database, so
data committed by services never leaks between cases.
"""

from __future__ import annotations

import pytest
from app.core.config import TestingConfig
from app.core.extensions import MEDIA_STORE_KEY
from app.core.extensions import db as _db  # Flask-SQLAlchemy instance
from app.factory import create_app  # application factory under test
from app.services._shared.ports import InMemoryMediaStore


class TestConfig(TestingConfig):
    """In-memory SQLite; token cookies without ``Secure`` so the test client
    sends them back over plain HTTP."""

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    COOKIE_SECURE = False
    LOG_LEVEL = "WARNING"


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Schema created and dropped around one test, inside an app context."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session that services also use."""
    return db.session


@pytest.fixture()
def media_store(app):
    """Install an in-memory media store on the application."""
    store = InMemoryMediaStore()
    app.extensions[MEDIA_STORE_KEY] = store
    return store


@pytest.fixture()
def client(app, db):
    return app.test_client()


@pytest.fixture()
def image_file(tmp_path):
    """Return a factory writing small fake image files under ``tmp_path``."""

    def _make(name: str = "avatar.png", content: bytes = b"\x89PNG fake") -> str:
        path = tmp_path / name
        path.write_bytes(content)
        return str(path)

    return _make


@pytest.fixture(scope="session")
def faker():
    """Seeded Faker shared by the session."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture(autouse=True)
def _bind_factories(session):
    from tests.factories import FactorySession

    FactorySession.bind(session)
    yield
    FactorySession.bind(None)
