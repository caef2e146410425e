"""DTOs for PlaylistService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from vidhub.services._shared.dto import UserSummaryOut
from vidhub.services.videos.dto import VideoOut


@dataclass(frozen=True, slots=True)
class PlaylistIn:
    """
    Create/update input.

    :param name: Playlist name (required on create).
    :param description: Free text.
    """

    name: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class PlaylistOut:
    """Playlist with its videos in insertion order."""

    id: int
    name: str
    description: str
    owner: UserSummaryOut
    videos: list[VideoOut] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
