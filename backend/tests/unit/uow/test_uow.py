"""Read-write and read-only units of work."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.orm import scoped_session

from tests.factories.user import UserFactory
from vidhub.core.extensions import db
from vidhub.models.user import User
from vidhub.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from vidhub.uow import SQLAlchemyUnitOfWork as RWuow


def _count_users(session) -> int:
    return session.execute(select(func.count(User.id))).scalar_one()


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_clean_exit(self, app_ctx, session):
        with RWuow() as uow:
            uow.users.add(User(username="kept", email="kept@example.com", full_name="K", password="x"))

        assert session.execute(select(User).filter_by(username="kept")).scalar_one_or_none()

    def test_rolls_back_on_error(self, app_ctx, session):
        before = _count_users(session)
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(User(username="gone", email="gone@example.com", full_name="G", password="x"))
            raise RuntimeError("boom")

        assert _count_users(session) == before


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app_ctx, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_blocks_core_dml(self, app_ctx, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(text("DELETE FROM users"))

    def test_allows_reads(self, app_ctx, session):
        UserFactory()
        with ROuow() as uow:
            assert uow.users.count() >= 1

    def test_disallows_commit(self, app_ctx, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guards_are_removed_on_exit(self, app_ctx, session):
        with ROuow():
            pass
        # writes work again once the read-only scope is closed
        with RWuow() as uow:
            uow.users.add(User(username="after", email="after@example.com", full_name="A", password="x"))
        assert session.execute(select(User).filter_by(username="after")).scalar_one_or_none()


def test_read_only_scope_enters_through_the_scoped_session(app_ctx, session):
    assert isinstance(db.session, scoped_session)
    UserFactory()

    with ROuow() as uow:
        assert uow._owns_txn is True
        assert uow.users.count() >= 1

    assert db.session().in_transaction() is False
