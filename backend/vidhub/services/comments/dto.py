"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidhub.services._shared.dto import UserSummaryOut


@dataclass(frozen=True, slots=True)
class CommentIn:
    content: str


@dataclass(frozen=True, slots=True)
class CommentOut:
    """
    Comment projection.

    :param likes_count: Number of likes on the comment.
    """

    id: int
    video_id: int
    content: str
    owner: UserSummaryOut
    likes_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
