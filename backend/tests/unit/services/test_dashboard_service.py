"""DashboardService aggregates for the channel owner."""

from __future__ import annotations

import pytest

from tests.factories.media import VideoFactory
from tests.factories.user import UserFactory
from vidhub.models import LikeTarget
from vidhub.repositories import LikeRepository, SubscriptionRepository
from vidhub.services import DashboardService, ServiceContext
from vidhub.services._shared.errors import AuthenticationError


def test_stats_sum_the_channel(app_ctx, session):
    owner = UserFactory()
    fans = UserFactory.create_batch(2)
    first = VideoFactory(owner=owner, views=10)
    VideoFactory(owner=owner, views=5, is_published=False)
    VideoFactory(views=100)

    subs = SubscriptionRepository(session=session)
    likes = LikeRepository(session=session)
    for fan in fans:
        subs.insert_pair(fan.id, owner.id)
        likes.insert_pair(fan.id, LikeTarget.VIDEO, first.id)
    session.commit()

    stats = DashboardService(ctx=ServiceContext(actor_id=owner.id)).stats()

    assert stats.total_videos == 2
    assert stats.total_views == 15
    assert stats.total_subscribers == 2
    assert stats.total_likes == 2


def test_empty_channel(app_ctx, session):
    owner = UserFactory()
    stats = DashboardService(ctx=ServiceContext(actor_id=owner.id)).stats()
    assert (stats.total_videos, stats.total_views, stats.total_likes) == (0, 0, 0)


def test_channel_videos_include_unpublished(app_ctx, session):
    owner = UserFactory()
    VideoFactory(owner=owner)
    VideoFactory(owner=owner, is_published=False)

    videos = DashboardService(ctx=ServiceContext(actor_id=owner.id)).channel_videos()
    assert len(videos) == 2


def test_requires_actor(app_ctx, session):
    with pytest.raises(AuthenticationError):
        DashboardService().stats()
