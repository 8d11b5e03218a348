# tests/unit/services/test_channel_service.py
from __future__ import annotations

import pytest
from app.services._shared.dto import PaginationIn
from app.services._shared.errors import AuthError, NotFoundError, ValidationError
from app.services.channels.dto import ChannelProfileOut, WatchedVideoOut
from app.services.channels.service import ChannelService
from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory, WatchHistoryEntryFactory


@pytest.fixture()
def service() -> ChannelService:
    return ChannelService()


class TestChannelProfile:
    def test_counts_both_directions(self, service):
        target = UserFactory(username="chan", cover_image_url="https://media.test/c.jpg")
        fans = [UserFactory() for _ in range(3)]
        followed = [UserFactory() for _ in range(2)]
        for fan in fans:
            SubscriptionFactory(subscriber_id=fan.id, channel_id=target.id)
        for other in followed:
            SubscriptionFactory(subscriber_id=target.id, channel_id=other.id)

        out = service.get_channel_profile("chan", viewer_id=fans[0].id)

        assert isinstance(out, ChannelProfileOut)
        assert out.username == "chan"
        assert out.subscriber_count == 3
        assert out.subscribed_to_count == 2
        assert out.is_subscribed is True
        assert out.cover_image_url == "https://media.test/c.jpg"

    def test_case_insensitive_lookup(self, service):
        UserFactory(username="mixed")
        assert service.get_channel_profile("MiXeD").username == "mixed"

    def test_anonymous_viewer_is_not_subscribed(self, service):
        target = UserFactory()
        SubscriptionFactory(channel_id=target.id)
        out = service.get_channel_profile(target.username)
        assert out.subscriber_count == 1
        assert out.is_subscribed is False

    def test_viewer_without_edge(self, service):
        target = UserFactory()
        viewer = UserFactory()
        out = service.get_channel_profile(target.username, viewer_id=viewer.id)
        assert out.is_subscribed is False
        assert out.subscriber_count == 0
        assert out.subscribed_to_count == 0

    def test_unknown_channel(self, service):
        with pytest.raises(NotFoundError):
            service.get_channel_profile("nobody")

    @pytest.mark.parametrize("username", ["", "   ", None])
    def test_blank_username(self, service, username):
        with pytest.raises(ValidationError):
            service.get_channel_profile(username)


class TestWatchHistory:
    def test_returns_entries_in_view_order_with_owner(self, service):
        viewer = UserFactory()
        owner = UserFactory(username="creator", full_name="Creator C")
        first = VideoFactory(owner=owner, title="first")
        second = VideoFactory(title="second")
        WatchHistoryEntryFactory(user=viewer, video=first)
        WatchHistoryEntryFactory(user=viewer, video=second)
        WatchHistoryEntryFactory(user=viewer, video=first)

        out = service.get_watch_history(viewer.id)

        assert out.meta is None
        assert [item.title for item in out.items] == ["first", "second", "first"]
        head = out.items[0]
        assert isinstance(head, WatchedVideoOut)
        assert head.owner is not None
        assert head.owner.username == "creator"
        assert head.owner.full_name == "Creator C"
        assert head.owner.avatar_url == owner.avatar_url

    def test_owner_projection_is_narrow(self, service):
        viewer = UserFactory()
        WatchHistoryEntryFactory(user=viewer)
        owner = service.get_watch_history(viewer.id).items[0].owner
        assert not hasattr(owner, "email")
        assert not hasattr(owner, "password_hash")

    def test_only_own_history(self, service):
        viewer = UserFactory()
        WatchHistoryEntryFactory()
        assert service.get_watch_history(viewer.id).items == []

    def test_paginated(self, service):
        viewer = UserFactory()
        videos = [VideoFactory(title=f"v{i}") for i in range(5)]
        for video in videos:
            WatchHistoryEntryFactory(user=viewer, video=video)

        out = service.get_watch_history(viewer.id, pagination=PaginationIn(page=2, limit=2))

        assert [item.title for item in out.items] == ["v2", "v3"]
        assert out.meta is not None
        assert out.meta.total == 5
        assert out.meta.has_prev is True
        assert out.meta.has_next is True

    @pytest.mark.parametrize("user_id", [None, 31337])
    def test_unknown_identity(self, service, user_id):
        with pytest.raises(AuthError):
            service.get_watch_history(user_id)
