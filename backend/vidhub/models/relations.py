"""Toggle relations: subscriptions and likes.

Existence of a row *is* the state ("subscribed", "liked"). Each table has a
unique constraint on its composite key so concurrent toggles cannot create
duplicates.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
    func,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from vidhub.core.extensions import db

from .base import PKMixin, ReprMixin


class Subscription(PKMixin, ReprMixin, db.Model):
    """``subscriber`` follows ``channel``. Self-subscription is rejected by a CHECK."""

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"
        ),
        CheckConstraint("subscriber_id <> channel_id", name="not_self"),
    )


class LikeTarget(str, Enum):
    """Kinds of resources a like can point at."""

    VIDEO = "video"
    COMMENT = "comment"


class Like(PKMixin, ReprMixin, db.Model):
    """
    A like from ``liked_by`` on a video or comment.

    ``target_id`` is polymorphic over ``target_kind`` so it carries no FK;
    services delete likes together with their targets.
    """

    __tablename__ = "likes"

    liked_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_kind: Mapped[LikeTarget] = mapped_column(
        SAEnum(
            LikeTarget,
            name="like_target",
            native_enum=False,
            length=16,
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("liked_by_id", "target_kind", "target_id", name="uq_likes_actor_target"),
        Index("ix_likes_target", "target_kind", "target_id"),
    )
