"""Playlist models (playlist + ordered membership)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidhub.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class Playlist(PKMixin, OwnedMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Named, ordered collection of videos owned by a user.

    Entries are kept in insertion order.
    """

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    owner: Mapped[User] = relationship("User", back_populates="playlists")
    entries: Mapped[list[PlaylistVideo]] = relationship(
        "PlaylistVideo",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistVideo.id",
        lazy="selectin",
    )


class PlaylistVideo(PKMixin, ReprMixin, db.Model):
    """Association object linking playlists <-> videos (one row per pair)."""

    __tablename__ = "playlist_videos"

    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_playlist_video"),
    )

    playlist: Mapped[Playlist] = relationship("Playlist", back_populates="entries")
    video: Mapped[Video] = relationship(
        "Video", back_populates="playlist_entries", lazy="joined", innerjoin=True
    )
