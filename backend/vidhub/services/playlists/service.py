"""
PlaylistService
===============

Playlists are owner-only for every mutation. Adding a video that is
already present is an invalid operation; removing one that is absent is
a not-found.
"""

from __future__ import annotations

import logging
from typing import Any

from vidhub.models.playlist import Playlist
from vidhub.services._shared.base import BaseService
from vidhub.services._shared.dto import PageMeta, PageOut, PaginationIn
from vidhub.services._shared.errors import (
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from vidhub.services.playlists.dto import PlaylistIn, PlaylistOut
from vidhub.services.videos.dto import video_out

logger = logging.getLogger(__name__)


class PlaylistService(BaseService):
    """Application service for ``Playlist``."""

    def _out(self, playlist: Playlist, viewer_id: int | None) -> PlaylistOut:
        # unpublished entries stay hidden from everyone but their owner
        videos = [
            video_out(entry.video)
            for entry in playlist.entries
            if entry.video.is_published or entry.video.owner_id == viewer_id
        ]
        return PlaylistOut(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            owner=self.user_summary(playlist.owner),
            videos=videos,
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
        )

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create(self, dto: PlaylistIn) -> PlaylistOut:
        actor_id = self.require_actor()
        name = (dto.name or "").strip()
        if not name:
            raise ValidationError("Playlist name is required")
        with self.rw_uow() as uow:
            playlist = uow.playlists.add(
                Playlist(owner_id=actor_id, name=name, description=(dto.description or "").strip())
            )
            out = self._out(playlist, actor_id)
        logger.info(
            "Playlist created",
            extra={"actor_id": actor_id, "resource": "Playlist", "resource_id": out.id},
        )
        return out

    def update(self, playlist_id: int, dto: PlaylistIn) -> PlaylistOut:
        updates: dict[str, Any] = {}
        if dto.name is not None:
            if not dto.name.strip():
                raise ValidationError("Playlist name cannot be blank")
            updates["name"] = dto.name.strip()
        if dto.description is not None:
            updates["description"] = dto.description.strip()
        if not updates:
            raise ValidationError("Nothing to update")
        with self.rw_uow() as uow:
            playlist = self.ensure_owner(
                uow.playlists.get_for_update(playlist_id), entity="Playlist", key=playlist_id
            )
            uow.playlists.update(playlist, **updates)
            return self._out(playlist, self.ctx.actor_id)

    def delete(self, playlist_id: int) -> None:
        with self.rw_uow() as uow:
            playlist = self.ensure_owner(
                uow.playlists.get_for_update(playlist_id), entity="Playlist", key=playlist_id
            )
            uow.playlists.delete(playlist)
        logger.info(
            "Playlist deleted",
            extra={"actor_id": self.ctx.actor_id, "resource": "Playlist", "resource_id": playlist_id},
        )

    def add_video(self, playlist_id: int, video_id: int) -> PlaylistOut:
        """
        Append a video.

        :raises NotFoundError: Unknown playlist or video.
        :raises AuthorizationError: Actor does not own the playlist.
        :raises InvalidOperationError: Video already in the playlist.
        """
        with self.rw_uow() as uow:
            playlist = self.ensure_owner(
                uow.playlists.get_for_update(playlist_id), entity="Playlist", key=playlist_id
            )
            if uow.videos.get(video_id) is None:
                raise NotFoundError("Video", video_id)
            if not uow.playlists.add_video(playlist, video_id):
                raise InvalidOperationError("Video already in playlist")
            out = self._out(playlist, self.ctx.actor_id)
        logger.info(
            "Playlist video added",
            extra={"actor_id": self.ctx.actor_id, "resource_id": playlist_id, "target_id": video_id},
        )
        return out

    def remove_video(self, playlist_id: int, video_id: int) -> PlaylistOut:
        """:raises NotFoundError: Unknown playlist or the video is not in it."""
        with self.rw_uow() as uow:
            playlist = self.ensure_owner(
                uow.playlists.get_for_update(playlist_id), entity="Playlist", key=playlist_id
            )
            if not uow.playlists.remove_video(playlist, video_id):
                raise NotFoundError("Playlist video", video_id)
            out = self._out(playlist, self.ctx.actor_id)
        logger.info(
            "Playlist video removed",
            extra={"actor_id": self.ctx.actor_id, "resource_id": playlist_id, "target_id": video_id},
        )
        return out

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get(self, playlist_id: int) -> PlaylistOut:
        with self.ro_uow() as uow:
            playlist = uow.playlists.get(playlist_id)
            if playlist is None:
                raise NotFoundError("Playlist", playlist_id)
            return self._out(playlist, self.ctx.actor_id)

    def list_by_user(self, user_id: int, pagination: PaginationIn) -> PageOut[PlaylistOut]:
        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            page = uow.playlists.list_by_owner(user_id, self.pagination_from(pagination))
            return PageOut(
                items=[self._out(p, self.ctx.actor_id) for p in page.items],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )
