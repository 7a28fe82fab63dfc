"""
Factory definitions for videos and their engagement facts.
"""

from __future__ import annotations

import factory

from vidshare.db.models import Comment as CommentDB
from vidshare.db.models import Video as VideoDB
from vidshare.db.models import VideoEngagement as VideoEngagementDB
from vidshare.db.models import generate_id
from vidshare.models.enums import EngagementType
from vidshare.models.video import VideoCreate

from tests.factories.user_factory import UserFactory


class VideoFactory(factory.Factory):
    """Factory for published Video rows with an author."""

    class Meta:
        model = VideoDB

    id = factory.LazyFunction(generate_id)
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    title = factory.Sequence(lambda n: f"Sourdough basics part {n}")
    description = factory.Faker("sentence", nb_words=12)
    thumbnail_url = factory.LazyAttribute(
        lambda o: f"https://cdn.example.com/thumbs/{o.id}.jpg"
    )
    video_url = factory.LazyAttribute(lambda o: f"https://cdn.example.com/v/{o.id}.mp4")
    publish = True


class VideoEngagementFactory(factory.Factory):
    """Factory for VideoEngagement rows; pass ``video_id`` and ``user_id``."""

    class Meta:
        model = VideoEngagementDB

    id = factory.LazyFunction(generate_id)
    video_id = factory.LazyFunction(generate_id)
    user_id = None
    engagement_type = EngagementType.VIEW.value


class CommentFactory(factory.Factory):
    """Factory for Comment rows; pass ``video_id`` and ``user``."""

    class Meta:
        model = CommentDB

    id = factory.LazyFunction(generate_id)
    video_id = factory.LazyFunction(generate_id)
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    message = factory.Faker("sentence", nb_words=6)


class VideoCreateFactory(factory.Factory):
    """Factory for VideoCreate models."""

    class Meta:
        model = VideoCreate

    user_id = factory.LazyFunction(generate_id)
    video_url = "https://cdn.example.com/v/upload.mp4"
