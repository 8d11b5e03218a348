"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Honour ``X-Forwarded-*`` headers when deployed behind a proxy.

    Controlled by the ``USE_PROXYFIX`` flag (defaults to ``True``). The
    ``secure`` token cookies rely on the forwarded scheme being trusted.
    """
    if app.config.get("USE_PROXYFIX", True):
        hops = int(app.config.get("PROXYFIX_HOPS", 1))
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
