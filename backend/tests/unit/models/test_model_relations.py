"""Constraint tests for the toggle relation tables."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from tests.factories.media import VideoFactory
from tests.factories.user import UserFactory
from vidhub.models import Like, LikeTarget, Subscription


def test_subscription_pair_is_unique(session):
    fan, channel = UserFactory(), UserFactory()
    session.add(Subscription(subscriber_id=fan.id, channel_id=channel.id))
    session.commit()

    session.add(Subscription(subscriber_id=fan.id, channel_id=channel.id))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_like_triple_is_unique_but_kinds_are_independent(session):
    fan = UserFactory()
    video = VideoFactory()
    session.add(Like(liked_by_id=fan.id, target_kind=LikeTarget.VIDEO, target_id=video.id))
    # same numeric id under another kind is a different relation
    session.add(Like(liked_by_id=fan.id, target_kind=LikeTarget.COMMENT, target_id=video.id))
    session.commit()

    session.add(Like(liked_by_id=fan.id, target_kind=LikeTarget.VIDEO, target_id=video.id))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_like_target_kind_round_trips_as_enum(session):
    fan = UserFactory()
    video = VideoFactory()
    session.add(Like(liked_by_id=fan.id, target_kind=LikeTarget.VIDEO, target_id=video.id))
    session.commit()

    stored = session.query(Like).filter_by(liked_by_id=fan.id).one()
    assert stored.target_kind is LikeTarget.VIDEO
