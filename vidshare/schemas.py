"""Request payloads and response shapes.

Responses are serialized with camelCase keys. Owners are always projected
through :class:`OwnerOut` so credentials never leave the service.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vidshare.db.models import TargetKind


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -- request payloads --


class LoginPayload(CamelModel):
    username_or_email: str | None = Field(default=None, max_length=255)
    password: str | None = None


class RefreshPayload(CamelModel):
    refresh_token: str | None = None


class ContentPayload(CamelModel):
    content: str | None = None


class PlaylistPayload(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


# -- responses --


class OwnerOut(CamelModel):
    id: UUID
    username: str
    full_name: str
    avatar: str


class UserOut(OwnerOut):
    email: str
    cover_image: str
    role: str
    created_at: datetime
    updated_at: datetime


class ChannelOut(UserOut):
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


class AuthOut(CamelModel):
    user: UserOut
    access_token: str
    refresh_token: str


class VideoOut(CamelModel):
    id: UUID
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float | None
    views: int
    is_published: bool
    owner: OwnerOut
    created_at: datetime
    updated_at: datetime


class VideoDetailOut(VideoOut):
    likes_count: int = 0


class CommentOut(CamelModel):
    id: UUID
    video_id: UUID
    content: str
    owner: OwnerOut
    created_at: datetime
    updated_at: datetime


class TweetOut(CamelModel):
    id: UUID
    content: str
    owner: OwnerOut
    created_at: datetime
    updated_at: datetime


class PlaylistOut(CamelModel):
    id: UUID
    name: str
    description: str
    owner: OwnerOut
    videos: list[VideoOut]
    created_at: datetime
    updated_at: datetime


class LikeOut(CamelModel):
    id: UUID
    liked_by_id: UUID
    target_kind: TargetKind
    target_id: UUID
    created_at: datetime


class SubscriptionOut(CamelModel):
    id: UUID
    subscriber_id: UUID
    channel_id: UUID
    created_at: datetime


class SubscriberOut(OwnerOut):
    """A user in a subscriber or subscribed-channel listing."""

    subscribed_at: datetime
