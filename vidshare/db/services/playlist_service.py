"""Playlist service for CRUD and video membership."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.db.models import Playlist, User, Video, playlist_videos
from vidshare.db.services import video_service
from vidshare.db.services.guards import authorize, ensure_exists
from vidshare.lib.exceptions import ValidationError
from vidshare.lib.pagination import PageParams, Paginated, newest_oldest, paginate
from vidshare.lib.validation import clean_text, require_text

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

SORTS = newest_oldest(Playlist)


async def create_playlist(db_session: AsyncSession, actor: Actor, name: str | None, description: str | None) -> Playlist:
    name = require_text(name, "Name and description are required")
    description = require_text(description, "Name and description are required")

    playlist = Playlist(owner_id=actor.id, name=name, description=description)
    db_session.add(playlist)
    await db_session.commit()
    await db_session.refresh(playlist)
    return playlist


async def get_playlist(db_session: AsyncSession, playlist_id: UUID) -> Playlist:
    return await ensure_exists(db_session, Playlist, playlist_id, "Playlist")


async def list_user_playlists(db_session: AsyncSession, user_id: UUID, params: PageParams) -> Paginated[Playlist]:
    """List a user's playlists; ``params.query`` matches the name."""
    await ensure_exists(db_session, User, user_id, "User")
    statement = select(Playlist).where(Playlist.owner_id == user_id)
    return await paginate(db_session, statement, params, SORTS, search_column=Playlist.name)


async def update_playlist(
    db_session: AsyncSession,
    actor: Actor,
    playlist_id: UUID,
    name: str | None = None,
    description: str | None = None,
) -> Playlist:
    name = clean_text(name)
    description = clean_text(description)
    if name is None and description is None:
        raise ValidationError("No valid fields to update")

    playlist = await ensure_exists(db_session, Playlist, playlist_id, "Playlist")
    authorize(actor, playlist, "update")

    if name is not None:
        playlist.name = name
    if description is not None:
        playlist.description = description
    await db_session.commit()
    return playlist


async def delete_playlist(db_session: AsyncSession, actor: Actor, playlist_id: UUID) -> None:
    playlist = await ensure_exists(db_session, Playlist, playlist_id, "Playlist")
    authorize(actor, playlist, "delete")

    await db_session.execute(delete(playlist_videos).where(playlist_videos.c.playlist_id == playlist_id))
    await db_session.delete(playlist)
    await db_session.commit()
    logger.info("User %s deleted playlist %s", actor.id, playlist_id)


async def _load_for_change(db_session: AsyncSession, actor: Actor, playlist_id: UUID, video_id: UUID) -> Playlist:
    playlist = await ensure_exists(db_session, Playlist, playlist_id, "Playlist")
    authorize(actor, playlist, "update")
    await ensure_exists(db_session, Video, video_id, "Video")
    return playlist


async def add_video(db_session: AsyncSession, actor: Actor, playlist_id: UUID, video_id: UUID) -> Playlist:
    """Add a video to a playlist. Adding a video that is already present is a no-op."""
    playlist = await _load_for_change(db_session, actor, playlist_id, video_id)
    await video_service.ensure_visible(db_session, video_id, actor)

    membership = and_(playlist_videos.c.playlist_id == playlist_id, playlist_videos.c.video_id == video_id)
    present = await db_session.execute(select(playlist_videos.c.video_id).where(membership))
    if present.first() is None:
        try:
            await db_session.execute(insert(playlist_videos).values(playlist_id=playlist_id, video_id=video_id))
            await db_session.commit()
        except IntegrityError:
            await db_session.rollback()
            logger.info("Video %s was added to playlist %s concurrently", video_id, playlist_id)

    await db_session.refresh(playlist)
    return playlist


async def remove_video(db_session: AsyncSession, actor: Actor, playlist_id: UUID, video_id: UUID) -> Playlist:
    playlist = await _load_for_change(db_session, actor, playlist_id, video_id)

    await db_session.execute(
        delete(playlist_videos).where(
            and_(playlist_videos.c.playlist_id == playlist_id, playlist_videos.c.video_id == video_id)
        )
    )
    await db_session.commit()
    await db_session.refresh(playlist)
    return playlist
