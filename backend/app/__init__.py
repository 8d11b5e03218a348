"""Account backend for a video platform.

``from app import create_app`` builds the Flask application; ``wsgi.py``
uses it for gunicorn.
"""

from __future__ import annotations

# Defined before the factory import: app.core.config reads it
__version__ = "0.1.0"

from .factory import create_app  # noqa: E402

__all__ = ["__version__", "create_app"]
