"""Factories for videos, comments and playlists."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from vidhub.models.comment import Comment
from vidhub.models.playlist import Playlist
from vidhub.models.video import Video


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph", nb_sentences=2)
    video_file_url = factory.Sequence(lambda n: f"/media/videos/clip-{n}.mp4")
    thumbnail_url = factory.Sequence(lambda n: f"/media/thumbnails/clip-{n}.png")
    duration = 42.0
    views = 0
    is_published = True


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    owner = factory.SubFactory(UserFactory)
    video = factory.SubFactory(VideoFactory)
    content = factory.Faker("sentence")


class PlaylistFactory(BaseFactory):
    class Meta:
        model = Playlist

    id = None
    owner = factory.SubFactory(UserFactory)
    name = factory.Faker("word")
    description = ""
