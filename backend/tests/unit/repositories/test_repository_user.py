"""UserRepository: lookups and refresh-token compare-and-swap."""

from __future__ import annotations

import pytest

from tests.factories.user import UserFactory
from vidhub.repositories import Pagination, UserRepository


@pytest.fixture()
def repo(session):
    return UserRepository(session=session)


def test_find_by_handle_or_email_matches_either(repo):
    user = UserFactory(username="handle", email="mail@example.com")

    assert repo.find_by_handle_or_email(username="HANDLE ") is user
    assert repo.find_by_handle_or_email(email=" Mail@Example.com") is user
    assert repo.find_by_handle_or_email(username="nobody", email="mail@example.com") is user
    assert repo.find_by_handle_or_email(username="nobody") is None
    assert repo.find_by_handle_or_email() is None


def test_rotate_refresh_token_is_compare_and_swap(repo, session):
    user = UserFactory()
    repo.set_refresh_token(user.id, "rt-1")

    assert repo.rotate_refresh_token(user.id, "rt-1", "rt-2") is True
    # a second swap presenting the old value loses
    assert repo.rotate_refresh_token(user.id, "rt-1", "rt-3") is False
    session.commit()
    assert user.refresh_token == "rt-2"


def test_rotate_fails_after_clear(repo, session):
    user = UserFactory()
    repo.set_refresh_token(user.id, "rt-1")
    assert repo.clear_refresh_token(user.id) is True

    assert repo.rotate_refresh_token(user.id, "rt-1", "rt-2") is False
    session.commit()
    assert user.refresh_token is None


def test_update_rejects_non_whitelisted_fields(repo):
    user = UserFactory()
    with pytest.raises(ValueError, match="refresh_token"):
        repo.update(user, refresh_token="sneaky")


def test_paginate_sorts_by_whitelist_only(repo):
    for name in ("carol", "alice", "bob"):
        UserFactory(username=name)

    page = repo.paginate(Pagination(page=1, limit=2, sort=["username"]))
    assert [u.username for u in page.items] == ["alice", "bob"]
    assert page.total == 3

    # unknown sort keys are ignored; the primary key keeps the order stable
    page = repo.paginate(Pagination(page=1, limit=3, sort=["password_hash"]))
    assert [u.username for u in page.items] == ["carol", "alice", "bob"]
