"""PlaylistService: owner-only mutations and membership rules."""

from __future__ import annotations

import pytest

from tests.factories.media import PlaylistFactory, VideoFactory
from tests.factories.user import UserFactory
from vidhub.models import Playlist
from vidhub.services import PaginationIn, PlaylistIn, PlaylistService, ServiceContext
from vidhub.services._shared.errors import (
    AuthorizationError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)


def _svc(actor_id: int | None = None) -> PlaylistService:
    return PlaylistService(ctx=ServiceContext(actor_id=actor_id))


def test_create_strips_and_requires_name(app_ctx, session):
    owner = UserFactory()
    out = _svc(owner.id).create(PlaylistIn(name="  Road trip ", description=" tunes "))
    assert (out.name, out.description, out.owner.id) == ("Road trip", "tunes", owner.id)
    assert out.videos == []

    with pytest.raises(ValidationError):
        _svc(owner.id).create(PlaylistIn(name="   "))


def test_update_and_delete_are_owner_only(app_ctx, session):
    playlist = PlaylistFactory()
    intruder = UserFactory()

    with pytest.raises(AuthorizationError):
        _svc(intruder.id).update(playlist.id, PlaylistIn(name="Mine now"))
    with pytest.raises(AuthorizationError):
        _svc(intruder.id).delete(playlist.id)

    owner_svc = _svc(playlist.owner_id)
    assert owner_svc.update(playlist.id, PlaylistIn(description="updated")).description == "updated"
    owner_svc.delete(playlist.id)
    assert session.get(Playlist, playlist.id) is None


def test_missing_playlist_is_not_found_before_ownership(app_ctx, session):
    intruder = UserFactory()
    with pytest.raises(NotFoundError):
        _svc(intruder.id).update(999_999, PlaylistIn(name="x"))


def test_add_video_twice_is_rejected(app_ctx, session):
    playlist = PlaylistFactory()
    video = VideoFactory()
    svc = _svc(playlist.owner_id)

    out = svc.add_video(playlist.id, video.id)
    assert [v.id for v in out.videos] == [video.id]

    with pytest.raises(InvalidOperationError, match="Video already in playlist"):
        svc.add_video(playlist.id, video.id)


def test_add_unknown_video_is_not_found(app_ctx, session):
    playlist = PlaylistFactory()
    with pytest.raises(NotFoundError) as exc:
        _svc(playlist.owner_id).add_video(playlist.id, 999_999)
    assert exc.value.entity == "Video"


def test_remove_video(app_ctx, session):
    playlist = PlaylistFactory()
    first, second = VideoFactory(), VideoFactory()
    svc = _svc(playlist.owner_id)
    svc.add_video(playlist.id, first.id)
    svc.add_video(playlist.id, second.id)

    out = svc.remove_video(playlist.id, first.id)
    assert [v.id for v in out.videos] == [second.id]

    with pytest.raises(NotFoundError):
        svc.remove_video(playlist.id, first.id)


def test_unpublished_entries_hidden_from_others(app_ctx, session):
    owner = UserFactory()
    playlist = PlaylistFactory(owner=owner)
    public = VideoFactory(owner=owner)
    draft = VideoFactory(owner=owner, is_published=False)
    svc = _svc(owner.id)
    svc.add_video(playlist.id, public.id)
    svc.add_video(playlist.id, draft.id)

    assert len(svc.get(playlist.id).videos) == 2
    assert [v.id for v in _svc().get(playlist.id).videos] == [public.id]


def test_list_by_user(app_ctx, session):
    owner = UserFactory()
    PlaylistFactory.create_batch(3, owner=owner)
    PlaylistFactory()

    page = _svc().list_by_user(owner.id, PaginationIn(page=1, limit=2))
    assert page.meta.total == 3
    assert len(page.items) == 2
    assert page.meta.has_next is True

    with pytest.raises(NotFoundError):
        _svc().list_by_user(999_999, PaginationIn())
