"""Repositories for toggle relations (subscriptions, likes).

Both expose the same primitive pair used by the toggle engine:
``delete_pair`` (returns the deleted row count) and ``insert_pair``
(raises ``IntegrityError`` when the unique key already exists).
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select

from vidhub.models.relations import Like, LikeTarget, Subscription
from vidhub.models.user import User
from vidhub.models.video import Video
from vidhub.repositories.base import BaseRepository, Page, Pagination, paginate_select


class SubscriptionRepository(BaseRepository[Subscription]):
    model = Subscription

    def _filterable_fields(self):
        return {
            "subscriber_id": Subscription.subscriber_id,
            "channel_id": Subscription.channel_id,
        }

    # ---------------------------- Toggle primitives ----------------------------
    def delete_pair(self, subscriber_id: int, channel_id: int) -> int:
        result = self.session.execute(
            delete(Subscription)
            .where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def insert_pair(self, subscriber_id: int, channel_id: int) -> Subscription:
        return self.add(Subscription(subscriber_id=subscriber_id, channel_id=channel_id))

    # ---------------------------- Queries ----------------------------
    def is_subscribed(self, subscriber_id: int, channel_id: int) -> bool:
        return self.exists(subscriber_id=subscriber_id, channel_id=channel_id)

    def count_subscribers(self, channel_id: int) -> int:
        return self.count(channel_id=channel_id)

    def count_subscriptions(self, subscriber_id: int) -> int:
        return self.count(subscriber_id=subscriber_id)

    def subscribers_of(self, channel_id: int, pagination: Pagination) -> Page[User]:
        stmt = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)

    def channels_of(self, subscriber_id: int, pagination: Pagination) -> Page[User]:
        stmt = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)


class LikeRepository(BaseRepository[Like]):
    model = Like

    def _filterable_fields(self):
        return {
            "liked_by_id": Like.liked_by_id,
            "target_kind": Like.target_kind,
            "target_id": Like.target_id,
        }

    # ---------------------------- Toggle primitives ----------------------------
    def delete_pair(self, liked_by_id: int, target_kind: LikeTarget, target_id: int) -> int:
        result = self.session.execute(
            delete(Like)
            .where(
                Like.liked_by_id == liked_by_id,
                Like.target_kind == target_kind,
                Like.target_id == target_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def insert_pair(self, liked_by_id: int, target_kind: LikeTarget, target_id: int) -> Like:
        return self.add(Like(liked_by_id=liked_by_id, target_kind=target_kind, target_id=target_id))

    # ---------------------------- Queries ----------------------------
    def count_for(self, target_kind: LikeTarget, target_id: int) -> int:
        return self.count(target_kind=target_kind, target_id=target_id)

    def count_for_targets(self, target_kind: LikeTarget, target_ids: Iterable[int]) -> int:
        ids = list(target_ids)
        if not ids:
            return 0
        stmt = select(func.count(Like.id)).where(
            Like.target_kind == target_kind, Like.target_id.in_(ids)
        )
        return int(self.session.execute(stmt).scalar_one())

    def liked_videos(self, liked_by_id: int, pagination: Pagination) -> Page[Video]:
        stmt = (
            select(Video)
            .join(Like, Like.target_id == Video.id)
            .where(
                Like.liked_by_id == liked_by_id,
                Like.target_kind == LikeTarget.VIDEO,
                Video.is_published.is_(True),
            )
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)

    def delete_for_targets(self, target_kind: LikeTarget, target_ids: Iterable[int]) -> int:
        """Remove all likes pointing at ``target_ids`` (target deletion)."""
        ids = list(target_ids)
        if not ids:
            return 0
        result = self.session.execute(
            delete(Like)
            .where(Like.target_kind == target_kind, Like.target_id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
