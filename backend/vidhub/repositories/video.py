"""Video and watch-history repositories."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute

from vidhub.models.video import Video, WatchHistory
from vidhub.repositories.base import BaseRepository, Page, Pagination


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video

    # ---------------------------- Whitelists ----------------------------
    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": Video.id,
            "title": Video.title,
            "views": Video.views,
            "duration": Video.duration,
            "created_at": Video.created_at,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "owner_id": Video.owner_id,
            "is_published": Video.is_published,
        }

    def _updatable_fields(self) -> set[str]:
        return {"title", "description", "thumbnail_url", "is_published"}

    # ---------------------------- Queries ----------------------------
    def search(
        self,
        pagination: Pagination,
        *,
        owner_id: int | None = None,
        query: str | None = None,
        viewer_id: int | None = None,
    ) -> Page[Video]:
        """
        Page through videos visible to ``viewer_id``.

        Published videos are visible to everyone; unpublished ones only to
        their owner. ``query`` matches title or description (case-insensitive).
        """
        stmt: Select[Any] = select(Video)
        if viewer_id is None:
            stmt = stmt.where(Video.is_published.is_(True))
        else:
            stmt = stmt.where(or_(Video.is_published.is_(True), Video.owner_id == viewer_id))
        if owner_id is not None:
            stmt = stmt.where(Video.owner_id == owner_id)
        if query:
            pattern = f"%{query.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Video.title).like(pattern),
                    func.lower(Video.description).like(pattern),
                )
            )
        if not pagination.sort:
            pagination.sort = ["-created_at"]
        return self.paginate_stmt(stmt, pagination)

    def list_by_owner(self, owner_id: int) -> list[Video]:
        stmt = (
            select(Video)
            .where(Video.owner_id == owner_id)
            .order_by(Video.created_at.desc(), Video.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def ids_by_owner(self, owner_id: int) -> list[int]:
        stmt = select(Video.id).where(Video.owner_id == owner_id)
        return list(self.session.execute(stmt).scalars().all())

    def total_views(self, owner_id: int) -> int:
        stmt = select(func.coalesce(func.sum(Video.views), 0)).where(Video.owner_id == owner_id)
        return int(self.session.execute(stmt).scalar_one())

    # ---------------------------- Mutations ----------------------------
    def increment_views(self, video_id: int) -> None:
        """``UPDATE videos SET views = views + 1``; no read-modify-write."""
        self.session.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session="fetch")
        )


class WatchHistoryRepository(BaseRepository[WatchHistory]):
    """One row per (user, video); re-watching refreshes ``watched_at``."""

    model = WatchHistory

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {"watched_at": WatchHistory.watched_at}

    def _touch(self, user_id: int, video_id: int) -> int:
        result = self.session.execute(
            update(WatchHistory)
            .where(WatchHistory.user_id == user_id, WatchHistory.video_id == video_id)
            .values(watched_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def record(self, user_id: int, video_id: int) -> None:
        if self._touch(user_id, video_id):
            return
        try:
            with self.session.begin_nested():
                self.session.add(WatchHistory(user_id=user_id, video_id=video_id))
        except IntegrityError:
            # a concurrent request inserted the pair first
            self._touch(user_id, video_id)

    def list_for_user(self, user_id: int, pagination: Pagination) -> Page[WatchHistory]:
        stmt = select(WatchHistory).where(WatchHistory.user_id == user_id)
        if not pagination.sort:
            pagination.sort = ["-watched_at"]
        return self.paginate_stmt(stmt, pagination)
