"""
Toggle engine for subscriptions and likes.

A toggle flips an existence-based relation and reports which way it went.
It is exactly-once under concurrent duplicates without any lock:

1. delete the relation by its composite key; one row gone means *removed*;
2. otherwise insert it inside a SAVEPOINT; success means *created*;
3. if the insert hits the unique constraint a concurrent toggle inserted
   first, so the relation is deleted again and *removed* is reported.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidhub.models.relations import LikeTarget
from vidhub.services._shared.base import BaseService
from vidhub.services._shared.dto import PageMeta, PageOut, PaginationIn, UserSummaryOut
from vidhub.services._shared.errors import InvalidOperationError, NotFoundError
from vidhub.services.toggles.dto import ToggleKind, ToggleResult
from vidhub.services.videos.dto import VideoOut, video_out
from vidhub.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

_LIKE_TARGETS = {
    ToggleKind.VIDEO_LIKE: LikeTarget.VIDEO,
    ToggleKind.COMMENT_LIKE: LikeTarget.COMMENT,
}


class ToggleService(BaseService):
    """Subscribe/unsubscribe and like/unlike, plus the listings built on them."""

    # ------------------------------------------------------------------ #
    # Toggle
    # ------------------------------------------------------------------ #

    def toggle(self, actor_id: int, target_id: int, kind: ToggleKind) -> ToggleResult:
        """
        Flip the ``kind`` relation between ``actor_id`` and ``target_id``.

        :raises InvalidOperationError: Subscribing to yourself.
        :raises NotFoundError: Target channel, video or comment does not exist.
        """
        with self.rw_uow() as uow:
            self._ensure_target(uow, actor_id, target_id, kind)

            if self._delete(uow, actor_id, target_id, kind):
                created = False
            else:
                try:
                    with uow.session.begin_nested():
                        self._insert(uow, actor_id, target_id, kind)
                    created = True
                except IntegrityError:
                    # lost the insert race; the duplicate toggle cancels out
                    self._delete(uow, actor_id, target_id, kind)
                    created = False

        logger.info(
            "Relation toggled",
            extra={
                "actor_id": actor_id,
                "kind": kind.value,
                "target_id": target_id,
                "created": created,
            },
        )
        return ToggleResult(created=created, kind=kind, target_id=target_id)

    def _ensure_target(
        self, uow: SQLAlchemyUnitOfWork, actor_id: int, target_id: int, kind: ToggleKind
    ) -> None:
        if kind is ToggleKind.SUBSCRIPTION:
            if int(actor_id) == int(target_id):
                raise InvalidOperationError("You cannot subscribe to your own channel")
            if uow.users.get(target_id) is None:
                raise NotFoundError("Channel", target_id)
        elif kind is ToggleKind.VIDEO_LIKE:
            if uow.videos.get(target_id) is None:
                raise NotFoundError("Video", target_id)
        elif uow.comments.get(target_id) is None:
            raise NotFoundError("Comment", target_id)

    def _delete(
        self, uow: SQLAlchemyUnitOfWork, actor_id: int, target_id: int, kind: ToggleKind
    ) -> int:
        if kind is ToggleKind.SUBSCRIPTION:
            return uow.subscriptions.delete_pair(actor_id, target_id)
        return uow.likes.delete_pair(actor_id, _LIKE_TARGETS[kind], target_id)

    def _insert(
        self, uow: SQLAlchemyUnitOfWork, actor_id: int, target_id: int, kind: ToggleKind
    ) -> None:
        if kind is ToggleKind.SUBSCRIPTION:
            uow.subscriptions.insert_pair(actor_id, target_id)
        else:
            uow.likes.insert_pair(actor_id, _LIKE_TARGETS[kind], target_id)

    # ------------------------------------------------------------------ #
    # Listings
    # ------------------------------------------------------------------ #

    def subscribers(self, channel_id: int, pagination: PaginationIn) -> PageOut[UserSummaryOut]:
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            page = uow.subscriptions.subscribers_of(channel_id, self.pagination_from(pagination))
            return PageOut(
                items=[self.user_summary(u) for u in page.items],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )

    def subscribed_channels(
        self, subscriber_id: int, pagination: PaginationIn
    ) -> PageOut[UserSummaryOut]:
        with self.ro_uow() as uow:
            if uow.users.get(subscriber_id) is None:
                raise NotFoundError("User", subscriber_id)
            page = uow.subscriptions.channels_of(subscriber_id, self.pagination_from(pagination))
            return PageOut(
                items=[self.user_summary(u) for u in page.items],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )

    def liked_videos(self, actor_id: int, pagination: PaginationIn) -> PageOut[VideoOut]:
        with self.ro_uow() as uow:
            page = uow.likes.liked_videos(actor_id, self.pagination_from(pagination))
            return PageOut(
                items=[video_out(v) for v in page.items],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )
