"""Account registration, login/logout, token rotation and channel profiles."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from vidshare.auth.identity import Actor
from vidshare.auth.roles import ROLES
from vidshare.auth.tokens import REFRESH, TokenPair, issue_token_pair, verify_token_of_type
from vidshare.config import Settings
from vidshare.db.models import User
from vidshare.db.services import subscription_service
from vidshare.db.services.guards import ensure_exists
from vidshare.lib.exceptions import Conflict, NotFound, Unauthenticated, ValidationError
from vidshare.lib.media import IMAGE_TYPES, MediaStore, Upload, save_upload
from vidshare.lib.validation import clean_text

logger = logging.getLogger(__name__)


@dataclass
class ChannelProfile:
    user: User
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


async def get_user_by_login(db_session: AsyncSession, username_or_email: str) -> User | None:
    login = username_or_email.strip().lower()
    result = await db_session.execute(
        select(User).where(or_(User.username == login, func.lower(User.email) == login))
    )
    return result.scalar_one_or_none()


async def register_user(
    db_session: AsyncSession,
    media: MediaStore,
    username: str | None,
    email: str | None,
    full_name: str | None,
    password: str | None,
    avatar: Upload | None,
    cover_image: Upload | None = None,
) -> User:
    """Create an account after validating input and uploading profile images.

    Uniqueness is checked before anything is uploaded so a duplicate
    registration never leaves orphaned files behind.
    """
    username = clean_text(username)
    email = clean_text(email)
    full_name = clean_text(full_name)
    if not (username and email and full_name and password):
        raise ValidationError("All fields are required")

    username = username.lower()
    if "@" not in email:
        raise ValidationError("Invalid email address")

    existing = await db_session.execute(
        select(User.id).where(or_(User.username == username, func.lower(User.email) == email.lower()))
    )
    if existing.first() is not None:
        raise ValidationError("User with this username or email already exists")

    avatar_upload = await save_upload(media, avatar, "Avatar", accept=IMAGE_TYPES)
    cover_url = ""
    if cover_image is not None and getattr(cover_image, "filename", None):
        cover_url = (await save_upload(media, cover_image, "Cover image", accept=IMAGE_TYPES)).secure_url

    user = User(
        username=username,
        email=email.lower(),
        full_name=full_name,
        password_hash=generate_password_hash(password),
        avatar=avatar_upload.secure_url,
        cover_image=cover_url,
    )
    db_session.add(user)
    try:
        await db_session.commit()
    except IntegrityError as exc:
        await db_session.rollback()
        raise Conflict("User with this username or email already exists") from exc
    logger.info("Registered user %s", username)
    return user


async def authenticate(db_session: AsyncSession, username_or_email: str | None, password: str | None) -> User:
    if not clean_text(username_or_email):
        raise ValidationError("Username or email is required")
    if not password:
        raise ValidationError("Password is required")

    user = await get_user_by_login(db_session, username_or_email)
    if user is None:
        raise NotFound("User does not exist")
    if not check_password_hash(user.password_hash, password):
        raise Unauthenticated("Invalid user credentials")
    return user


async def issue_tokens(db_session: AsyncSession, user: User, settings: Settings) -> TokenPair:
    """Issue a token pair and persist the refresh half on the user."""
    pair = issue_token_pair(
        user.id,
        settings.secret_key,
        access_ttl=settings.auth.access_token_ttl,
        refresh_ttl=settings.auth.refresh_token_ttl,
    )
    user.refresh_token = pair.refresh_token
    await db_session.commit()
    return pair


async def logout(db_session: AsyncSession, actor: Actor) -> None:
    user = await ensure_exists(db_session, User, actor.id, "User")
    user.refresh_token = None
    await db_session.commit()


async def rotate_tokens(db_session: AsyncSession, refresh_token: str | None, settings: Settings) -> tuple[User, TokenPair]:
    """Exchange a valid, current refresh token for a new pair.

    A refresh token that verifies but no longer matches the stored value has
    already been rotated or revoked by logout and is rejected.
    """
    if not refresh_token:
        raise Unauthenticated("Unauthorized request")

    user_id = verify_token_of_type(refresh_token, settings.secret_key, REFRESH)
    if user_id is None:
        raise Unauthenticated("Invalid refresh token")

    user = await db_session.get(User, user_id)
    if user is None:
        raise Unauthenticated("Invalid refresh token")
    if user.refresh_token != refresh_token:
        raise Unauthenticated("Refresh token is expired or used")

    return user, await issue_tokens(db_session, user, settings)


async def get_current_user(db_session: AsyncSession, actor: Actor) -> User:
    return await ensure_exists(db_session, User, actor.id, "User")


async def get_channel_profile(db_session: AsyncSession, username: str, actor: Actor | None) -> ChannelProfile:
    username = (clean_text(username) or "").lower()
    if not username:
        raise ValidationError("Username is missing")

    result = await db_session.execute(select(User).where(User.username == username))
    channel = result.scalar_one_or_none()
    if channel is None:
        raise NotFound("Channel does not exist")

    is_subscribed = False
    if actor is not None:
        is_subscribed = await subscription_service.is_subscribed(db_session, actor.id, channel.id)

    return ChannelProfile(
        user=channel,
        subscribers_count=await subscription_service.count_subscribers(db_session, channel.id),
        channels_subscribed_to_count=await subscription_service.count_subscriptions(db_session, channel.id),
        is_subscribed=is_subscribed,
    )


async def set_role(db_session: AsyncSession, username: str, role: str) -> User:
    """Assign ``role`` to the user called ``username``."""
    if role not in ROLES:
        raise ValidationError(f"Unknown role {role!r}")

    result = await db_session.execute(select(User).where(User.username == username.lower()))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFound("User does not exist")

    user.role = role
    await db_session.commit()
    logger.info("Set role of %s to %s", user.username, role)
    return user
