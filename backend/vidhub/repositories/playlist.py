"""Playlist repository (playlists and their video entries)."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from vidhub.models.playlist import Playlist, PlaylistVideo
from vidhub.repositories.base import BaseRepository, Page, Pagination


class PlaylistRepository(BaseRepository[Playlist]):
    model = Playlist

    # ---------------------------- Whitelists ----------------------------
    def _sortable_fields(self):
        return {"name": Playlist.name, "created_at": Playlist.created_at}

    def _filterable_fields(self):
        return {"owner_id": Playlist.owner_id}

    def _updatable_fields(self):
        return {"name", "description"}

    # ---------------------------- Queries ----------------------------
    def list_by_owner(self, owner_id: int, pagination: Pagination) -> Page[Playlist]:
        stmt = select(Playlist).where(Playlist.owner_id == owner_id)
        if not pagination.sort:
            pagination.sort = ["-created_at"]
        return self.paginate_stmt(stmt, pagination)

    def has_video(self, playlist_id: int, video_id: int) -> bool:
        stmt = select(PlaylistVideo.id).where(
            PlaylistVideo.playlist_id == playlist_id, PlaylistVideo.video_id == video_id
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Entries ----------------------------
    def add_video(self, playlist: Playlist, video_id: int) -> bool:
        """
        Append ``video_id`` to ``playlist``.

        :returns: ``False`` when the pair already exists (unique constraint).
        """
        try:
            with self.session.begin_nested():
                self.session.add(PlaylistVideo(playlist_id=playlist.id, video_id=video_id))
        except IntegrityError:
            return False
        self.session.refresh(playlist, attribute_names=["entries"])
        return True

    def remove_video(self, playlist: Playlist, video_id: int) -> bool:
        """:returns: ``True`` when an entry was deleted."""
        result = self.session.execute(
            delete(PlaylistVideo)
            .where(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            self.session.refresh(playlist, attribute_names=["entries"])
        return result.rowcount == 1
