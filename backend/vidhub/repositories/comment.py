"""Comment repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from vidhub.models.comment import Comment
from vidhub.repositories.base import BaseRepository, Page, Pagination


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _sortable_fields(self):
        return {"created_at": Comment.created_at, "id": Comment.id}

    def _filterable_fields(self):
        return {"video_id": Comment.video_id, "owner_id": Comment.owner_id}

    def _updatable_fields(self):
        return {"content"}

    def list_for_video(self, video_id: int, pagination: Pagination) -> Page[Comment]:
        stmt = select(Comment).where(Comment.video_id == video_id)
        if not pagination.sort:
            pagination.sort = ["-created_at"]
        return self.paginate_stmt(stmt, pagination)

    def ids_for_video(self, video_id: int) -> list[int]:
        stmt = select(Comment.id).where(Comment.video_id == video_id)
        return cast(list[int], list(self.session.execute(stmt).scalars().all()))
