"""Environment-driven settings, one class per deployment flavour."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

from app import __version__

# Picks the settings class: development | testing | production
ENV_VAR: Final[str] = "APP_ENV"

# A missing .env is fine
load_dotenv()

_TRUTHY: Final = frozenset({"1", "true", "yes", "y", "on"})
_DURATION_RE: Final = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def env_bool(name: str, default: bool = False) -> bool:
    """Read a yes/no flag from the environment.

    ``1``, ``true``, ``yes``, ``y`` and ``on`` (any case) count as true, any
    other value as false. An unset variable yields ``default``.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def parse_duration(raw: str) -> timedelta:
    """Turn ``"15m"``, ``"10d"`` or ``"3600"`` into a :class:`~datetime.timedelta`.

    Units are ``s``, ``m``, ``h``, ``d`` and ``w``; a bare integer means
    seconds.

    :raises ValueError: Anything else (fractions, negatives, unknown units).
    """
    match = _DURATION_RE.match(raw or "")
    if match is None:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


def env_duration(name: str, default: str) -> timedelta:
    """:func:`parse_duration` over ``$name``, or over ``default`` when unset."""
    return parse_duration(os.getenv(name) or default)


class BaseConfig:
    """Settings common to every environment.

    Token settings
    --------------
    ``ACCESS_TOKEN_SECRET`` / ``ACCESS_TOKEN_EXPIRY`` sign and bound access
    tokens; they are mirrored into the ``JWT_*`` keys read by
    flask-jwt-extended. ``REFRESH_TOKEN_SECRET`` / ``REFRESH_TOKEN_EXPIRY``
    are used only by the refresh flow and must differ from the access secret.
    Expiries accept :func:`parse_duration` literals.

    Media settings
    --------------
    With ``MINIO_ENDPOINT`` empty no media store is wired, and routes that
    upload answer 500. ``MEDIA_PUBLIC_BASE_URL`` overrides the URL prefix
    returned for stored objects.
    """

    APP_VERSION = os.getenv("APP_VERSION", __version__)
    API_BASE_PREFIX = "/api"

    # Signing
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    ACCESS_TOKEN_EXPIRY = env_duration("ACCESS_TOKEN_EXPIRY", "15m")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    REFRESH_TOKEN_EXPIRY = env_duration("REFRESH_TOKEN_EXPIRY", "10d")

    # flask-jwt-extended handles access tokens only
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_EXPIRY
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_COOKIE_NAME = "accessToken"
    JWT_COOKIE_CSRF_PROTECT = False

    # accessToken / refreshToken cookies
    COOKIE_SECURE = env_bool("COOKIE_SECURE", True)
    COOKIE_HTTPONLY = True
    COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "Lax")
    COOKIE_PATH = "/"

    # Object storage
    MINIO_ENDPOINT = os.getenv("MINIO_ENDPOINT", "")
    MINIO_ACCESS_KEY = os.getenv("MINIO_ACCESS_KEY", "")
    MINIO_SECRET_KEY = os.getenv("MINIO_SECRET_KEY", "")
    MINIO_BUCKET = os.getenv("MINIO_BUCKET", "youtubebackend")
    MINIO_SECURE = env_bool("MINIO_SECURE", False)
    MEDIA_PUBLIC_BASE_URL = os.getenv("MEDIA_PUBLIC_BASE_URL", "")
    MEDIA_KEY_PREFIX = os.getenv("MEDIA_KEY_PREFIX", "youtubebackend")

    # Multipart staging
    UPLOAD_TMP_DIR = os.getenv("UPLOAD_TMP_DIR") or None
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = int(os.getenv("CORS_MAX_AGE", "600"))

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, token cookies allowed over plain HTTP."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    COOKIE_SECURE = env_bool("COOKIE_SECURE", False)


class TestingConfig(BaseConfig):
    """Test runs with fixed secrets, SQLite in memory and no object store.

    ``TEST_DATABASE_URL`` points the suite at another database.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    ACCESS_TOKEN_SECRET = "test-access-secret-0123456789abcdef"
    REFRESH_TOKEN_SECRET = "test-refresh-secret-0123456789abcdef"
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    MINIO_ENDPOINT = ""
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Deployed behind a proxy; never echoes SQL."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Settings class named by ``$APP_ENV``; development when unset or unknown."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
