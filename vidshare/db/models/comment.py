from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    video_id: Mapped[UUID] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)

    owner_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id], lazy="selectin")

    content: Mapped[str] = mapped_column(Text, nullable=False)
