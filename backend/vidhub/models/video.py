"""Video and watch-history models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidhub.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .playlist import PlaylistVideo
    from .user import User


class Video(PKMixin, OwnedMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Uploaded video owned by a channel (user).

    Notes
    -----
    - ``is_published`` = False hides the video from everyone but its owner.
    - ``views`` is incremented with a single ``UPDATE ... SET views = views + 1``.
    """

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    video_file_url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(500), nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    owner: Mapped[User] = relationship(
        "User", back_populates="videos", lazy="joined", innerjoin=True
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="video", cascade="all, delete-orphan", lazy="select"
    )
    playlist_entries: Mapped[list[PlaylistVideo]] = relationship(
        "PlaylistVideo", back_populates="video", cascade="all, delete-orphan", lazy="select"
    )
    watch_entries: Mapped[list[WatchHistory]] = relationship(
        "WatchHistory", back_populates="video", cascade="all, delete-orphan", lazy="select"
    )


class WatchHistory(PKMixin, ReprMixin, db.Model):
    """A user's most recent view of a video (one row per pair)."""

    __tablename__ = "watch_history"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
    )

    video: Mapped[Video] = relationship(
        "Video", back_populates="watch_entries", lazy="joined", innerjoin=True
    )
