"""Video, watch-history, comment and playlist repositories."""

from __future__ import annotations

from sqlalchemy import func, select

from tests.factories.media import CommentFactory, PlaylistFactory, VideoFactory
from tests.factories.user import UserFactory
from vidhub.models import WatchHistory
from vidhub.repositories import (
    CommentRepository,
    Pagination,
    PlaylistRepository,
    VideoRepository,
    WatchHistoryRepository,
)


def _p(limit: int = 10, sort: list[str] | None = None) -> Pagination:
    return Pagination(page=1, limit=limit, sort=sort or [])


class TestVideoRepository:
    def test_search_hides_unpublished_from_other_viewers(self, session):
        owner, viewer = UserFactory(), UserFactory()
        VideoFactory(owner=owner, title="public one")
        VideoFactory(owner=owner, title="draft", is_published=False)
        repo = VideoRepository(session=session)

        assert repo.search(_p(), viewer_id=None).total == 1
        assert repo.search(_p(), viewer_id=viewer.id).total == 1
        assert repo.search(_p(), viewer_id=owner.id).total == 2

    def test_search_by_text_and_owner(self, session):
        owner, other = UserFactory(), UserFactory()
        VideoFactory(owner=owner, title="Cooking Pasta", description="dinner")
        VideoFactory(owner=other, title="Gardening", description="pasta sauce herbs")
        VideoFactory(owner=other, title="Chess openings", description="strategy")
        repo = VideoRepository(session=session)

        assert repo.search(_p(), query="PASTA").total == 2
        page = repo.search(_p(), query="pasta", owner_id=owner.id)
        assert [v.title for v in page.items] == ["Cooking Pasta"]

    def test_search_sorts_by_whitelisted_field(self, session):
        for views in (5, 50, 20):
            VideoFactory(views=views)
        repo = VideoRepository(session=session)

        page = repo.search(_p(sort=["-views"]))
        assert [v.views for v in page.items] == [50, 20, 5]

    def test_increment_views_and_totals(self, session):
        owner = UserFactory()
        video = VideoFactory(owner=owner, views=3)
        VideoFactory(owner=owner, views=4)
        repo = VideoRepository(session=session)

        repo.increment_views(video.id)
        session.commit()

        assert video.views == 4
        assert repo.total_views(owner.id) == 8
        assert sorted(repo.ids_by_owner(owner.id)) == sorted(v.id for v in owner.videos)


class TestWatchHistoryRepository:
    def test_record_is_one_row_per_pair(self, session):
        viewer = UserFactory()
        first, second = VideoFactory(), VideoFactory()
        repo = WatchHistoryRepository(session=session)

        repo.record(viewer.id, first.id)
        repo.record(viewer.id, second.id)
        repo.record(viewer.id, first.id)
        session.commit()

        rows = session.execute(
            select(func.count(WatchHistory.id)).where(WatchHistory.user_id == viewer.id)
        ).scalar_one()
        assert rows == 2
        assert repo.list_for_user(viewer.id, _p()).total == 2


class TestCommentRepository:
    def test_list_and_ids_for_video(self, session):
        video = VideoFactory()
        comments = [CommentFactory(video=video) for _ in range(3)]
        CommentFactory()  # another video
        repo = CommentRepository(session=session)

        page = repo.list_for_video(video.id, _p(limit=2))
        assert page.total == 3
        assert len(page.items) == 2
        assert sorted(repo.ids_for_video(video.id)) == sorted(c.id for c in comments)


class TestPlaylistRepository:
    def test_add_video_is_unique_per_playlist(self, session):
        playlist = PlaylistFactory()
        video = VideoFactory()
        repo = PlaylistRepository(session=session)

        assert repo.add_video(playlist, video.id) is True
        assert repo.add_video(playlist, video.id) is False
        assert [e.video_id for e in playlist.entries] == [video.id]
        assert repo.has_video(playlist.id, video.id)

    def test_remove_video_reports_absence(self, session):
        playlist = PlaylistFactory()
        video = VideoFactory()
        repo = PlaylistRepository(session=session)
        repo.add_video(playlist, video.id)

        assert repo.remove_video(playlist, video.id) is True
        assert repo.remove_video(playlist, video.id) is False
        assert playlist.entries == []
