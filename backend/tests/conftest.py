"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction on a single in-memory SQLite
connection. Sessions join it through SAVEPOINTs, so service commits stay
visible within the test and everything is rolled back afterwards.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from vidhub.core.config import TestingConfig
from vidhub.core.extensions import db as _db  # Flask-SQLAlchemy instance
from vidhub.factory import create_app  # application factory under test


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application with :class:`TestingConfig` applied and uploads written
        to a temporary directory.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)

    class TestConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        UPLOAD_FOLDER = str(tmp_path_factory.mktemp("media"))
        MEDIA_BASE_URL = "/media"
        LOG_LEVEL = "WARNING"

    application = create_app(TestConfig, instance_relative_config=False)
    return application


@pytest.fixture(scope="session")
def db(app):
    """Create the schema once per session.

    pysqlite is switched to manual transaction control so SAVEPOINTs behave
    (``BEGIN`` is emitted by SQLAlchemy itself).
    """
    with app.app_context():
        engine = _db.engine

        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn):
            conn.exec_driver_sql("BEGIN")

        _db.create_all()

    yield _db

    with app.app_context():
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep one connection open for the whole session.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection carrying each test's outer transaction.
    """
    with app.app_context():
        engine = db.engine
    conn = engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def session(db, connection):
    """Provide a scoped session joined to a per-test outer transaction.

    ``db.session`` is swapped for the duration of the test so units of work,
    repositories and request teardown all use it. Session commits release a
    SAVEPOINT; the outer transaction is rolled back at the end.
    """
    outer = connection.begin()
    factory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(factory)

    original_session = db.session
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture()
def app_ctx(app, session):
    """Push a fresh application context for service-level tests."""
    with app.app_context() as ctx:
        yield ctx


@pytest.fixture()
def client(app, session):
    """Test client without a cookie jar; each request states its credentials."""
    return app.test_client(use_cookies=False)


@pytest.fixture()
def cookie_client(app, session):
    """Test client that keeps cookies between requests, like a browser."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def storage(app):
    """The object storage adapter the app was wired with."""
    return app.extensions["object_storage"]


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy to the transactional session for tests that use the DB."""
    if "session" not in request.fixturenames:
        yield
        return
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
