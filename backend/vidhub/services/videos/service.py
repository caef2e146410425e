"""
VideoService
============

Video publishing, reads (with view counting and watch history), owner-only
updates, deletion and the publish toggle.
"""

from __future__ import annotations

import logging
from typing import Any

from vidhub.models.relations import LikeTarget
from vidhub.models.video import Video
from vidhub.services._shared.base import BaseService, ServiceContext
from vidhub.services._shared.dto import PageMeta, PageOut, PaginationIn
from vidhub.services._shared.errors import (
    AuthorizationError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from vidhub.services._shared.ports.object_storage import ObjectStorage, UploadedFile
from vidhub.services.videos.dto import (
    VideoOut,
    VideoPublishIn,
    VideoQueryIn,
    VideoUpdateIn,
    WatchEntryOut,
    video_out,
)

logger = logging.getLogger(__name__)


class VideoService(BaseService):
    """
    Application service for the ``Video`` aggregate.

    Mutations go through the ownership guard with ``ctx.actor_id``.
    """

    def __init__(
        self,
        *,
        storage: ObjectStorage | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.storage = storage

    def _upload(self, file: UploadedFile | None, folder: str, label: str) -> str:
        if file is None or not file.filename:
            raise ValidationError(f"{label} file is required")
        if self.storage is None:
            raise InternalError("Object storage is not configured")
        return self.storage.upload(file, folder=folder).url

    def _discard(self, *urls: str | None) -> None:
        for url in urls:
            if url and self.storage is not None:
                self.storage.delete(url)

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def publish(self, dto: VideoPublishIn) -> VideoOut:
        """
        Upload the video and its thumbnail and create the record.

        :raises AuthenticationError: No actor.
        :raises ValidationError: Missing title, description or files.
        """
        actor_id = self.require_actor()
        if not (dto.title or "").strip() or not (dto.description or "").strip():
            raise ValidationError("Title and description are required")
        if dto.duration is not None and dto.duration < 0:
            raise ValidationError("Duration cannot be negative")

        video_url = self._upload(dto.video_file, "videos", "Video")
        try:
            thumb_url = self._upload(dto.thumbnail, "thumbnails", "Thumbnail")
        except ValidationError:
            self._discard(video_url)
            raise

        with self.rw_uow() as uow:
            video = uow.videos.add(
                Video(
                    owner_id=actor_id,
                    title=dto.title.strip(),
                    description=dto.description.strip(),
                    video_file_url=video_url,
                    thumbnail_url=thumb_url,
                    duration=float(dto.duration or 0),
                )
            )
            out = video_out(video)

        logger.info(
            "Video published",
            extra={"actor_id": actor_id, "resource": "Video", "resource_id": out.id},
        )
        return out

    def update(self, video_id: int, dto: VideoUpdateIn) -> VideoOut:
        updates: dict[str, Any] = {}
        if dto.title is not None:
            if not dto.title.strip():
                raise ValidationError("Title cannot be blank")
            updates["title"] = dto.title.strip()
        if dto.description is not None:
            updates["description"] = dto.description.strip()
        if not updates and dto.thumbnail is None:
            raise ValidationError("Nothing to update")

        previous_thumb: str | None = None
        new_thumb: str | None = None
        try:
            with self.rw_uow() as uow:
                video = self.ensure_owner(
                    uow.videos.get_for_update(video_id), entity="Video", key=video_id
                )
                if dto.thumbnail is not None:
                    previous_thumb = video.thumbnail_url
                    new_thumb = self._upload(dto.thumbnail, "thumbnails", "Thumbnail")
                    updates["thumbnail_url"] = new_thumb
                uow.videos.update(video, **updates)
                out = video_out(video)
        except Exception:
            self._discard(new_thumb)
            raise

        self._discard(previous_thumb)
        logger.info(
            "Video updated",
            extra={"actor_id": self.ctx.actor_id, "resource": "Video", "resource_id": video_id},
        )
        return out

    def delete(self, video_id: int) -> None:
        """Delete the video with its comments, likes and stored files."""
        with self.rw_uow() as uow:
            video = self.ensure_owner(
                uow.videos.get_for_update(video_id), entity="Video", key=video_id
            )
            blobs = (video.video_file_url, video.thumbnail_url)
            comment_ids = uow.comments.ids_for_video(video_id)
            uow.likes.delete_for_targets(LikeTarget.COMMENT, comment_ids)
            uow.likes.delete_for_targets(LikeTarget.VIDEO, [video_id])
            uow.videos.delete(video)

        self._discard(*blobs)
        logger.info(
            "Video deleted",
            extra={"actor_id": self.ctx.actor_id, "resource": "Video", "resource_id": video_id},
        )

    def toggle_publish(self, video_id: int) -> VideoOut:
        with self.rw_uow() as uow:
            video = self.ensure_owner(
                uow.videos.get_for_update(video_id), entity="Video", key=video_id
            )
            uow.videos.update(video, is_published=not video.is_published)
            out = video_out(video)
        logger.info(
            "Video publish status toggled",
            extra={"actor_id": self.ctx.actor_id, "resource": "Video", "resource_id": video_id},
        )
        return out

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get(self, video_id: int) -> VideoOut:
        """
        Read one video, counting the view.

        Known viewers also get the video added to (or bumped in) their watch
        history. Unpublished videos are readable only by their owner.

        :raises NotFoundError: Unknown video.
        :raises AuthorizationError: Unpublished and the actor is not the owner.
        """
        viewer = self.ctx.actor_id
        with self.rw_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            if not video.is_published and video.owner_id != viewer:
                raise AuthorizationError("This video is not published")

            uow.videos.increment_views(video_id)
            if viewer is not None:
                uow.watch_history.record(viewer, video_id)
            out = video_out(
                video,
                likes_count=uow.likes.count_for(LikeTarget.VIDEO, video_id),
                is_liked=(
                    viewer is not None
                    and uow.likes.exists(
                        liked_by_id=viewer, target_kind=LikeTarget.VIDEO, target_id=video_id
                    )
                ),
            )
        return out

    def list(self, filters: VideoQueryIn, pagination: PaginationIn) -> PageOut[VideoOut]:
        with self.ro_uow() as uow:
            page = uow.videos.search(
                self.pagination_from(pagination),
                owner_id=filters.owner_id,
                query=filters.query,
                viewer_id=self.ctx.actor_id,
            )
            return PageOut(
                items=[video_out(v) for v in page.items],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )

    def watch_history(self, pagination: PaginationIn) -> PageOut[WatchEntryOut]:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            page = uow.watch_history.list_for_user(actor_id, self.pagination_from(pagination))
            return PageOut(
                items=[
                    WatchEntryOut(video=video_out(entry.video), watched_at=entry.watched_at)
                    for entry in page.items
                ],
                meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
            )
