"""Likes on videos, comments and tweets.

A like points at exactly one target. The target is stored as a
``(target_kind, target_id)`` pair rather than three nullable foreign keys, and
callers address it through :class:`LikeTarget`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.db.base import Base


class TargetKind(str, enum.Enum):
    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


@dataclass(frozen=True)
class LikeTarget:
    """Tagged reference to the entity being liked."""

    kind: TargetKind
    id: UUID

    @classmethod
    def video(cls, video_id: UUID) -> LikeTarget:
        return cls(TargetKind.VIDEO, video_id)

    @classmethod
    def comment(cls, comment_id: UUID) -> LikeTarget:
        return cls(TargetKind.COMMENT, comment_id)

    @classmethod
    def tweet(cls, tweet_id: UUID) -> LikeTarget:
        return cls(TargetKind.TWEET, tweet_id)


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liked_by_id", "target_kind", "target_id", name="uq_likes_user_kind_target"),
    )

    liked_by_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_kind: Mapped[TargetKind] = mapped_column(
        Enum(
            TargetKind,
            name="like_target_kind",
            native_enum=False,
            length=16,
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )
    target_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    @property
    def target(self) -> LikeTarget:
        return LikeTarget(self.target_kind, self.target_id)
