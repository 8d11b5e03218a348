"""Factory Boy definitions for videos and watch history entries."""

from __future__ import annotations

from app.models.video import Video
from app.models.watch_history import WatchHistoryEntry

import factory
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    video_file = factory.Sequence(lambda n: f"https://media.test/youtubebackend/video{n}.mp4")
    thumbnail = factory.Sequence(lambda n: f"https://media.test/youtubebackend/thumb{n}.jpg")
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    duration = factory.Faker("pyfloat", min_value=1, max_value=3600)
    views = 0
    is_published = True


class WatchHistoryEntryFactory(BaseFactory):
    """One view of ``video`` by ``user``; created in call order."""

    class Meta:
        model = WatchHistoryEntry

    id = None
    user = factory.SubFactory(UserFactory)
    video = factory.SubFactory(VideoFactory)
