"""Extension singletons shared by the app factory, models and services."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Constraint names are matched by ``violates()`` when mapping IntegrityError
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def _connect_redis(app: Flask) -> None:
    """Attach a Redis client under ``app.extensions["redis_client"]`` when configured."""
    url = app.config.get("REDIS_URL")
    if not url:
        app.extensions.pop("redis_client", None)
        return
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    app.extensions["redis_client"] = client
    log.info("Redis connected")


def init_app(app: Flask) -> None:
    """Bind database, migrations, JWT, the login limiter and Redis to ``app``.

    Parameters
    ----------
    app: flask.Flask
        Application being built. The :mod:`vidhub.models` package is imported
        here so the metadata is complete before Flask-Migrate sees it.
    """
    db.init_app(app)

    from vidhub import models as _models  # noqa: F401

    migrate.init_app(app, db)

    from vidhub.infra.jwt.flask_jwt_token_provider import register_jwt_callbacks

    jwt.init_app(app)
    register_jwt_callbacks(jwt)
    limiter.init_app(app)
    _connect_redis(app)
