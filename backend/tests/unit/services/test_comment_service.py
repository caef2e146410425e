"""CommentService: add, list, edit and delete."""

from __future__ import annotations

import pytest

from tests.factories.media import CommentFactory, VideoFactory
from tests.factories.user import UserFactory
from vidhub.models import Comment, LikeTarget
from vidhub.repositories import LikeRepository
from vidhub.services import CommentIn, CommentService, PaginationIn, ServiceContext
from vidhub.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def _svc(actor_id: int | None = None) -> CommentService:
    return CommentService(ctx=ServiceContext(actor_id=actor_id))


def test_add_comment(app_ctx, session):
    author = UserFactory()
    video = VideoFactory()

    out = _svc(author.id).add(video.id, CommentIn(content="  Nice one  "))

    assert out.content == "Nice one"
    assert out.video_id == video.id
    assert out.owner.username == author.username
    assert out.likes_count == 0


@pytest.mark.parametrize("content", ["", "   "])
def test_add_rejects_blank_content(app_ctx, session, content):
    author = UserFactory()
    video = VideoFactory()
    with pytest.raises(ValidationError):
        _svc(author.id).add(video.id, CommentIn(content=content))


def test_add_requires_actor_and_video(app_ctx, session):
    author = UserFactory()
    video = VideoFactory()
    with pytest.raises(AuthenticationError):
        _svc().add(video.id, CommentIn(content="hi"))
    with pytest.raises(NotFoundError):
        _svc(author.id).add(999_999, CommentIn(content="hi"))


def test_list_for_video_counts_likes(app_ctx, session):
    video = VideoFactory()
    liked = CommentFactory(video=video)
    CommentFactory(video=video)
    CommentFactory()
    fan = UserFactory()
    LikeRepository(session=session).insert_pair(fan.id, LikeTarget.COMMENT, liked.id)
    session.commit()

    page = _svc().list_for_video(video.id, PaginationIn())

    assert page.meta.total == 2
    likes = {c.id: c.likes_count for c in page.items}
    assert likes[liked.id] == 1


def test_update_is_author_only(app_ctx, session):
    comment = CommentFactory()
    intruder = UserFactory()

    with pytest.raises(AuthorizationError):
        _svc(intruder.id).update(comment.id, CommentIn(content="edited"))
    assert _svc(comment.owner_id).update(comment.id, CommentIn(content="edited")).content == "edited"


def test_delete_removes_comment_likes(app_ctx, session):
    comment = CommentFactory()
    fan = UserFactory()
    likes = LikeRepository(session=session)
    likes.insert_pair(fan.id, LikeTarget.COMMENT, comment.id)
    session.commit()
    comment_id = comment.id

    _svc(comment.owner_id).delete(comment_id)

    assert session.get(Comment, comment_id) is None
    assert likes.count_for(LikeTarget.COMMENT, comment_id) == 0
