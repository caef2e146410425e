"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from vidhub.core.extensions import db
from vidhub.repositories import (
    CommentRepository,
    LikeRepository,
    PlaylistRepository,
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
    WatchHistoryRepository,
)
from vidhub.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.videos = VideoRepository(session=self.session)
        self.watch_history = WatchHistoryRepository(session=self.session)
        self.comments = CommentRepository(session=self.session)
        self.playlists = PlaylistRepository(session=self.session)
        self.subscriptions = SubscriptionRepository(session=self.session)
        self.likes = LikeRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Commits on clean exit, rolls back when the block raises.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Optionally sets the transaction isolation level and READ ONLY mode on
      dialects that support ``SET TRANSACTION`` (PostgreSQL, MySQL/MariaDB).
    - Installs portable write-guards (ORM flush + cursor-level DML checks).
    - Rolls back on exit when it started the transaction itself.
    - Disallows ``commit()``.

    Parameters
    ----------
    isolation_level:
        Optional transaction isolation level hint, e.g. ``"READ COMMITTED"``.
    enforce_db_readonly:
        If ``True`` (default), applies ``SET TRANSACTION READ ONLY`` when supported.

    Notes
    -----
    When the session already has a transaction in progress the scope attaches
    to it: guards still apply but no ``SET TRANSACTION`` is issued and the
    outer transaction is left untouched on exit.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
        "grant",
        "revoke",
    )
    _TX_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly

        self._conn: Connection | None = None
        self._owns_txn = False
        self._listeners_installed = False

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        session = self._current_session()
        self._owns_txn = not session.in_transaction()
        if self._owns_txn:
            session.begin()

        self._conn = session.connection()
        self._install_listeners()

        if self._owns_txn and self._conn.dialect.name in self._TX_DIALECTS:
            self._apply_transaction_directives()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owns_txn:
                self.session.rollback()
        finally:
            self._remove_listeners()
            self._conn = None
            self._owns_txn = False

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards & Listeners --------------------------

    def _apply_transaction_directives(self) -> None:
        try:
            if self.isolation_level:
                iso = self.isolation_level.upper().strip()
                if iso not in (
                    "READ COMMITTED",
                    "REPEATABLE READ",
                    "SERIALIZABLE",
                    "READ UNCOMMITTED",
                ):
                    raise ValueError(f"Unknown isolation level {iso!r}")
                self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))
            if self.enforce_db_readonly:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            current_app.logger.warning(
                "SET TRANSACTION directives failed (%s). Falling back to guards-only.", exc
            )

    def _current_session(self) -> Session:
        # listen on the thread-local Session, not the scoped proxy (which targets every session)
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _install_listeners(self) -> None:
        """Install ORM/db-level listeners to prevent any write attempt."""
        if self._listeners_installed:
            return

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        self._guarded_session = self._current_session()
        event.listen(self._guarded_session, "before_flush", _before_flush)
        event.listen(self._conn, "before_cursor_execute", _before_cursor_execute)

        self._ro_before_flush = _before_flush
        self._ro_before_cursor_execute = _before_cursor_execute
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        """Detach previously installed listeners."""
        if not self._listeners_installed:
            return
        event.remove(self._guarded_session, "before_flush", self._ro_before_flush)
        event.remove(self._conn, "before_cursor_execute", self._ro_before_cursor_execute)
        self._listeners_installed = False
