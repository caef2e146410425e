"""CORS policy for the API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Allow the configured origins on ``/api/*``.

    Session cookies need credentialed requests, which browsers refuse for a
    wildcard origin, so credentials are only enabled for an explicit list
    from ``CORS_ORIGINS`` (comma separated).
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]
    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
