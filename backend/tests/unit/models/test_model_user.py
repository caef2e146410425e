"""Model tests for :class:`vidhub.models.user.User`."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from vidhub.models.user import User


class TestUserModel:
    def test_password_is_hashed_and_verifiable(self, session):
        user = UserFactory(password="S3cure!pass")

        assert user.password_hash != "S3cure!pass"
        assert user.verify_password("S3cure!pass") is True
        assert user.verify_password("s3cure!pass") is False

    def test_password_is_write_only(self):
        user = User(username="reader", email="reader@example.com", full_name="Reader")
        with pytest.raises(AttributeError):
            _ = user.password

    def test_empty_password_rejected(self):
        user = User(username="blank", email="blank@example.com", full_name="Blank")
        with pytest.raises(ValueError):
            user.password = ""

    def test_rehash_on_change_produces_new_salt(self, session):
        user = UserFactory()
        first = user.password_hash
        user.password = DEFAULT_PASSWORD
        assert user.password_hash != first
        assert user.verify_password(DEFAULT_PASSWORD)

    def test_username_and_email_are_normalized(self):
        user = User(username="  MixedCase ", email=" Mixed@Example.COM ", full_name=" Name ")
        assert user.username == "mixedcase"
        assert user.email == "mixed@example.com"
        assert user.full_name == "Name"

    def test_owner_id_is_own_id(self, session):
        user = UserFactory()
        assert user.owner_id == user.id

    def test_email_unique_constraint(self, session):
        UserFactory(username="first", email="dup@example.com")
        with pytest.raises(IntegrityError):
            UserFactory(username="second", email="dup@example.com")
        session.rollback()

    def test_refresh_token_starts_empty(self, session):
        assert UserFactory().refresh_token is None
