"""Channel dashboard: totals and the channel's own uploads."""

from __future__ import annotations

from dataclasses import dataclass

from vidhub.models.relations import LikeTarget
from vidhub.services._shared.base import BaseService
from vidhub.services.videos.dto import VideoOut, video_out


@dataclass(frozen=True, slots=True)
class ChannelStatsOut:
    """
    Totals for the actor's channel.

    :param total_likes: Likes across all of the channel's videos.
    """

    total_videos: int
    total_views: int
    total_subscribers: int
    total_likes: int


class DashboardService(BaseService):
    """Read-only aggregates for the authenticated channel owner."""

    def stats(self) -> ChannelStatsOut:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            video_ids = uow.videos.ids_by_owner(actor_id)
            return ChannelStatsOut(
                total_videos=len(video_ids),
                total_views=uow.videos.total_views(actor_id),
                total_subscribers=uow.subscriptions.count_subscribers(actor_id),
                total_likes=uow.likes.count_for_targets(LikeTarget.VIDEO, video_ids),
            )

    def channel_videos(self) -> list[VideoOut]:
        """All of the actor's videos, published or not, newest first."""
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            return [video_out(v) for v in uow.videos.list_by_owner(actor_id)]
