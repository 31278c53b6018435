"""User account model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.auth.roles import ROLE_USER
from vidshare.db.base import Base


class User(Base):
    """A registered account. Every channel is a user."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    avatar: Mapped[str] = mapped_column(String(1024), nullable=False)
    cover_image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")

    role: Mapped[str] = mapped_column(String(32), nullable=False, default=ROLE_USER)

    # Persisted so logout and rotation can invalidate outstanding refresh tokens
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
