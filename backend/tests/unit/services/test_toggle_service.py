"""Toggle engine: subscriptions and likes flip exactly once per call."""

from __future__ import annotations

import pytest

from tests.factories.media import CommentFactory, VideoFactory
from tests.factories.user import UserFactory
from vidhub.models import LikeTarget
from vidhub.repositories import LikeRepository, SubscriptionRepository
from vidhub.services import PaginationIn, ToggleKind, ToggleService
from vidhub.services._shared.errors import InvalidOperationError, NotFoundError


@pytest.fixture()
def service(app_ctx) -> ToggleService:
    return ToggleService()


def test_subscription_toggles_created_then_removed(service, session):
    fan, channel = UserFactory(), UserFactory()
    subs = SubscriptionRepository(session=session)

    first = service.toggle(fan.id, channel.id, ToggleKind.SUBSCRIPTION)
    assert first.created is True
    assert subs.is_subscribed(fan.id, channel.id)

    second = service.toggle(fan.id, channel.id, ToggleKind.SUBSCRIPTION)
    assert second.created is False
    assert not subs.is_subscribed(fan.id, channel.id)


def test_cannot_subscribe_to_self(service, session):
    user = UserFactory()
    with pytest.raises(InvalidOperationError, match="your own channel"):
        service.toggle(user.id, user.id, ToggleKind.SUBSCRIPTION)
    assert SubscriptionRepository(session=session).count() == 0


@pytest.mark.parametrize(
    "kind, entity",
    [
        (ToggleKind.SUBSCRIPTION, "Channel"),
        (ToggleKind.VIDEO_LIKE, "Video"),
        (ToggleKind.COMMENT_LIKE, "Comment"),
    ],
)
def test_missing_target_is_not_found(service, session, kind, entity):
    user = UserFactory()
    with pytest.raises(NotFoundError) as exc:
        service.toggle(user.id, 999_999, kind)
    assert exc.value.entity == entity


def test_video_and_comment_likes_are_independent(service, session):
    fan = UserFactory()
    video = VideoFactory()
    comment = CommentFactory(video=video)
    likes = LikeRepository(session=session)

    assert service.toggle(fan.id, video.id, ToggleKind.VIDEO_LIKE).created is True
    assert service.toggle(fan.id, comment.id, ToggleKind.COMMENT_LIKE).created is True
    assert likes.count_for(LikeTarget.VIDEO, video.id) == 1
    assert likes.count_for(LikeTarget.COMMENT, comment.id) == 1

    assert service.toggle(fan.id, video.id, ToggleKind.VIDEO_LIKE).created is False
    assert likes.count_for(LikeTarget.VIDEO, video.id) == 0
    assert likes.count_for(LikeTarget.COMMENT, comment.id) == 1


def test_lost_insert_race_resolves_to_removed(service, session, monkeypatch):
    """
    A concurrent toggle inserted the pair between our delete and insert:
    the unique key rejects our insert and the relation ends up removed.
    """
    fan, channel = UserFactory(), UserFactory()
    subs = SubscriptionRepository(session=session)
    subs.insert_pair(fan.id, channel.id)  # the concurrent winner's row
    session.commit()

    original = SubscriptionRepository.delete_pair
    calls = {"n": 0}

    def delete_pair(self, subscriber_id, channel_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return 0  # our delete ran before the other insert landed
        return original(self, subscriber_id, channel_id)

    monkeypatch.setattr(SubscriptionRepository, "delete_pair", delete_pair)

    result = service.toggle(fan.id, channel.id, ToggleKind.SUBSCRIPTION)

    assert result.created is False
    assert calls["n"] == 2
    assert subs.count(subscriber_id=fan.id, channel_id=channel.id) == 0


def test_toggle_result_echoes_kind_and_target(service, session):
    fan = UserFactory()
    video = VideoFactory()
    result = service.toggle(fan.id, video.id, ToggleKind.VIDEO_LIKE)
    assert result.kind is ToggleKind.VIDEO_LIKE
    assert result.target_id == video.id


def test_listings(service, session):
    channel = UserFactory(username="channel")
    fan = UserFactory(username="fan")
    video = VideoFactory(owner=channel)
    service.toggle(fan.id, channel.id, ToggleKind.SUBSCRIPTION)
    service.toggle(fan.id, video.id, ToggleKind.VIDEO_LIKE)

    subscribers = service.subscribers(channel.id, PaginationIn())
    assert [u.username for u in subscribers.items] == ["fan"]
    assert subscribers.meta.total == 1

    channels = service.subscribed_channels(fan.id, PaginationIn())
    assert [u.username for u in channels.items] == ["channel"]

    liked = service.liked_videos(fan.id, PaginationIn())
    assert [v.id for v in liked.items] == [video.id]

    with pytest.raises(NotFoundError):
        service.subscribers(999_999, PaginationIn())
