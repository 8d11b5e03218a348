"""Application factory."""

from __future__ import annotations

from typing import Any

from flask import Flask

from app.core import cors, errors, extensions, logger, proxy
from app.core.config import BaseConfig, get_config

# ProxyFix first: it must wrap wsgi_app before anything reads the scheme.
# Error handlers last so they also cover blueprint registration.
_INITIALIZERS = (
    proxy.init_app,
    extensions.init_app,
    logger.init_app,
    cors.init_app,
)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    media_store: Any | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build the Flask app.

    :param config: Settings object or import path; ``$APP_ENV`` picks one
        when omitted.
    :param media_store: Replaces the MinIO-backed store (tests pass an
        in-memory one).
    :param instance_relative_config: Also read ``instance/<filename>``.
    :param instance_config_filename: Instance override file name.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(config if config is not None else get_config())
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    logger.configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    for init in _INITIALIZERS:
        init(app)
    if media_store is not None:
        app.extensions[extensions.MEDIA_STORE_KEY] = media_store

    from app.api import init_app as register_api

    register_api(app)
    errors.init_app(app)
    return app
