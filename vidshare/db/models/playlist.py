from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from advanced_alchemy.types import DateTimeUTC
from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.base import Base

# The composite primary key keeps a playlist's video set free of duplicates
playlist_videos = Table(
    "playlist_videos",
    Base.metadata,
    Column("playlist_id", ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True),
    Column("video_id", ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True),
    Column("added_at", DateTimeUTC(timezone=True), nullable=False, default=lambda: datetime.now(UTC)),
)


class Playlist(Base):
    __tablename__ = "playlists"

    owner_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id], lazy="selectin")

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    videos: Mapped[list["Video"]] = relationship(
        "Video",
        secondary=playlist_videos,
        order_by=playlist_videos.c.added_at,
        lazy="selectin",
        viewonly=True,
    )
