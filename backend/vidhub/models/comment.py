"""Comment model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidhub.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class Comment(PKMixin, OwnedMixin, TimestampMixin, ReprMixin, db.Model):
    """A user's comment on a video. Only the author may edit or delete it."""

    __tablename__ = "comments"

    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped[User] = relationship("User", lazy="joined", innerjoin=True)
    video: Mapped[Video] = relationship("Video", back_populates="comments")
