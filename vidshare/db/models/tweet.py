from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.base import Base

TWEET_MAX_LENGTH = 280


class Tweet(Base):
    __tablename__ = "tweets"

    owner_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id], lazy="selectin")

    content: Mapped[str] = mapped_column(String(TWEET_MAX_LENGTH), nullable=False)
