"""DTOs for VideoService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidhub.services._shared.dto import UserSummaryOut
from vidhub.services._shared.ports.object_storage import UploadedFile

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class VideoPublishIn:
    """
    Input DTO for publishing a new video.

    :param title: Title (required).
    :param description: Description (required, may be short).
    :param video_file: Uploaded video blob.
    :param thumbnail: Uploaded thumbnail image.
    :param duration: Length in seconds, when the client knows it.
    """

    title: str
    description: str
    video_file: UploadedFile | None
    thumbnail: UploadedFile | None
    duration: float = 0.0


@dataclass(frozen=True, slots=True)
class VideoUpdateIn:
    """Fields to change; ``None`` keeps the current value."""

    title: str | None = None
    description: str | None = None
    thumbnail: UploadedFile | None = None


@dataclass(frozen=True, slots=True)
class VideoQueryIn:
    """Listing filters: free-text ``query`` and/or a channel ``owner_id``."""

    query: str | None = None
    owner_id: int | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class VideoOut:
    """
    Video projection.

    ``likes_count`` and ``is_liked`` are only filled on single-video reads.
    """

    id: int
    title: str
    description: str
    video_file_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    owner: UserSummaryOut
    created_at: datetime | None = None
    likes_count: int | None = None
    is_liked: bool | None = None


@dataclass(frozen=True, slots=True)
class WatchEntryOut:
    video: VideoOut
    watched_at: datetime


def video_out(video, *, likes_count: int | None = None, is_liked: bool | None = None) -> VideoOut:
    owner = video.owner
    return VideoOut(
        id=video.id,
        title=video.title,
        description=video.description,
        video_file_url=video.video_file_url,
        thumbnail_url=video.thumbnail_url,
        duration=float(video.duration or 0),
        views=int(video.views or 0),
        is_published=bool(video.is_published),
        owner=UserSummaryOut(
            id=owner.id,
            username=owner.username,
            full_name=owner.full_name,
            avatar_url=owner.avatar_url,
        ),
        created_at=video.created_at,
        likes_count=likes_count,
        is_liked=is_liked,
    )
