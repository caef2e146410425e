"""Repository package: persistence-layer access for all domain models."""

from __future__ import annotations

from vidhub.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from vidhub.repositories.comment import CommentRepository
from vidhub.repositories.playlist import PlaylistRepository
from vidhub.repositories.relations import LikeRepository, SubscriptionRepository
from vidhub.repositories.user import UserRepository
from vidhub.repositories.video import VideoRepository, WatchHistoryRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "apply_sorting",
    "paginate_select",
    # Domain
    "CommentRepository",
    "LikeRepository",
    "PlaylistRepository",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
    "WatchHistoryRepository",
]
