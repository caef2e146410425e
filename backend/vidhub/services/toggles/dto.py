"""DTOs for the toggle engine (subscriptions and likes)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ToggleKind(str, Enum):
    """Relation being flipped. The value is used in logs and responses."""

    SUBSCRIPTION = "subscription"
    VIDEO_LIKE = "video_like"
    COMMENT_LIKE = "comment_like"


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """
    Outcome of one toggle.

    :param created: ``True`` if the relation now exists, ``False`` if it was removed.
    :param kind: Relation kind.
    :param target_id: Channel, video or comment id.
    """

    created: bool
    kind: ToggleKind
    target_id: int
