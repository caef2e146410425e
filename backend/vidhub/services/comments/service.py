"""Comment use cases: list per video, add, edit and delete (author only)."""

from __future__ import annotations

import logging

from vidhub.models.comment import Comment
from vidhub.models.relations import LikeTarget
from vidhub.services._shared.base import BaseService
from vidhub.services._shared.dto import PageMeta, PageOut, PaginationIn
from vidhub.services._shared.errors import NotFoundError, ValidationError
from vidhub.services.comments.dto import CommentIn, CommentOut
from vidhub.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

logger = logging.getLogger(__name__)


def _content(dto: CommentIn) -> str:
    content = (dto.content or "").strip()
    if not content:
        raise ValidationError("Comment content is required")
    return content


class CommentService(BaseService):
    """Application service for ``Comment``."""

    def _out(self, uow: SQLAlchemyRepositoryContainer, comment: Comment) -> CommentOut:
        return CommentOut(
            id=comment.id,
            video_id=comment.video_id,
            content=comment.content,
            owner=self.user_summary(comment.owner),
            likes_count=uow.likes.count_for(LikeTarget.COMMENT, comment.id),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    def list_for_video(self, video_id: int, pagination: PaginationIn) -> PageOut[CommentOut]:
        with self.ro_uow() as uow:
            if uow.videos.get(video_id) is None:
                raise NotFoundError("Video", video_id)
            page = uow.comments.list_for_video(video_id, self.pagination_from(pagination))
            return PageOut(
                items=[self._out(uow, c) for c in page.items],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )

    def add(self, video_id: int, dto: CommentIn) -> CommentOut:
        """
        Comment on a video as the current actor.

        :raises NotFoundError: Unknown video.
        :raises ValidationError: Empty content.
        """
        actor_id = self.require_actor()
        content = _content(dto)
        with self.rw_uow() as uow:
            if uow.videos.get(video_id) is None:
                raise NotFoundError("Video", video_id)
            comment = uow.comments.add(
                Comment(owner_id=actor_id, video_id=video_id, content=content)
            )
            out = self._out(uow, comment)

        logger.info(
            "Comment added",
            extra={"actor_id": actor_id, "resource": "Comment", "resource_id": out.id},
        )
        return out

    def update(self, comment_id: int, dto: CommentIn) -> CommentOut:
        content = _content(dto)
        with self.rw_uow() as uow:
            comment = self.ensure_owner(
                uow.comments.get_for_update(comment_id), entity="Comment", key=comment_id
            )
            uow.comments.update(comment, content=content)
            out = self._out(uow, comment)
        return out

    def delete(self, comment_id: int) -> None:
        """Delete a comment and the likes pointing at it."""
        with self.rw_uow() as uow:
            comment = self.ensure_owner(
                uow.comments.get_for_update(comment_id), entity="Comment", key=comment_id
            )
            uow.likes.delete_for_targets(LikeTarget.COMMENT, [comment_id])
            uow.comments.delete(comment)

        logger.info(
            "Comment deleted",
            extra={"actor_id": self.ctx.actor_id, "resource": "Comment", "resource_id": comment_id},
        )
