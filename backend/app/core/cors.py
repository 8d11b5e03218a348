"""CORS policy for the versioned API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

ALLOWED_HEADERS = ("Authorization", "Content-Type", "X-Request-ID")
EXPOSED_HEADERS = ("X-Request-ID",)


def parse_origins(raw: str | None) -> list[str]:
    """Split a comma-separated ``CORS_ORIGINS`` value; blanks are dropped."""
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


def init_app(app: Flask) -> None:
    """Enable CORS on ``<API_BASE_PREFIX>/*``.

    Token cookies only travel cross-site with credentials, and browsers refuse
    credentials for a ``*`` origin. So credentials are enabled only when
    ``CORS_ORIGINS`` lists explicit origins.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    explicit = bool(origins) and "*" not in origins
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={f"{prefix}/*": {"origins": origins if explicit else "*"}},
        supports_credentials=explicit,
        allow_headers=list(ALLOWED_HEADERS),
        expose_headers=list(EXPOSED_HEADERS),
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
