"""User and channel resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .common import MetaSchema


class UpdateProfileSchema(Schema):
    """Payload for updating display name and email."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(data_key="fullName", load_default=None)
    email = fields.String(load_default=None)


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    full_name = fields.String(data_key="fullName", required=True)
    avatar_url = fields.String(data_key="avatarUrl", required=True)
    cover_image_url = fields.String(data_key="coverImageUrl", required=True)


class ChannelProfileSchema(Schema):
    """Channel header with subscription counters."""

    full_name = fields.String(data_key="fullName")
    username = fields.String()
    subscriber_count = fields.Integer(data_key="subscriberCount")
    subscribed_to_count = fields.Integer(data_key="subscribedToCount")
    is_subscribed = fields.Boolean(data_key="isSubscribed")
    avatar_url = fields.String(data_key="avatarUrl")
    cover_image_url = fields.String(data_key="coverImageUrl")


class VideoOwnerSchema(Schema):
    full_name = fields.String(data_key="fullName")
    username = fields.String()
    avatar_url = fields.String(data_key="avatarUrl")


class WatchedVideoSchema(Schema):
    """A watched video with its narrowed owner projection."""

    id = fields.Integer()
    video_file = fields.String(data_key="videoFile")
    thumbnail = fields.String()
    title = fields.String()
    description = fields.String()
    duration = fields.Float()
    views = fields.Integer()
    is_published = fields.Boolean(data_key="isPublished")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    watched_at = fields.DateTime(data_key="watchedAt", allow_none=True)
    owner = fields.Nested(VideoOwnerSchema, allow_none=True)


class WatchHistoryPageSchema(Schema):
    """Paginated watch history envelope payload."""

    items = fields.List(fields.Nested(WatchedVideoSchema))
    meta = fields.Nested(MetaSchema)
