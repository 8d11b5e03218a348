"""Extension singletons and the media store registry."""

from __future__ import annotations

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Constraint names are stable so services can tell which unique key was hit
# (e.g. ``uq_users_email``)
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    session_options={"autoflush": False},
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

MEDIA_STORE_KEY = "media_store"


def init_app(app: Flask) -> None:
    """Bind the database, migrations, JWT and (optionally) MinIO to ``app``.

    The MinIO store is only built when ``MINIO_ENDPOINT`` is set; otherwise
    :func:`get_media_store` raises until someone installs a store under
    ``app.extensions[MEDIA_STORE_KEY]``.
    """
    db.init_app(app)
    # Mapped classes must be registered before Alembic autogenerates
    from app import models  # noqa: F401

    migrate.init_app(app, db)

    jwt.init_app(app)
    from app.core import jwt_handlers

    jwt_handlers.register(jwt)

    app.extensions.pop(MEDIA_STORE_KEY, None)
    if app.config.get("MINIO_ENDPOINT"):
        from app.infra.minio.minio_media_store import MinioMediaStore

        app.extensions[MEDIA_STORE_KEY] = MinioMediaStore.from_config(app.config)


def get_media_store():
    """Media store of the current app.

    :raises RuntimeError: None configured.
    """
    store = current_app.extensions.get(MEDIA_STORE_KEY)
    if store is None:
        raise RuntimeError("Media store is not configured. Set MINIO_ENDPOINT.")
    return store
