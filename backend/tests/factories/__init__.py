"""factory_boy base bound to the test app's SQLAlchemy session."""

from __future__ import annotations

import factory


class FactorySession:
    """Holds the session the autouse fixture in ``conftest.py`` binds."""

    current = None

    @classmethod
    def bind(cls, session) -> None:
        cls.current = session

    @classmethod
    def get(cls):
        if cls.current is None:
            raise RuntimeError("No session bound for factories; is conftest.py loaded?")
        return cls.current


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Commits every row it creates.

    Flushed-only rows would vanish when a read-only unit of work rolls back
    inside the service under test.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = FactorySession.get
        sqlalchemy_session_persistence = "commit"
