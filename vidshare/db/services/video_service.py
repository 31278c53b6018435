"""Video service for publishing, listing and managing videos."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import and_, delete, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.db.models import Comment, Like, TargetKind, Video, playlist_videos
from vidshare.db.services.guards import authorize, can_modify, ensure_exists
from vidshare.lib.exceptions import NotFound, ValidationError
from vidshare.lib.media import IMAGE_TYPES, VIDEO_TYPES, MediaStore, Upload, save_upload
from vidshare.lib.pagination import PageParams, Paginated, newest_oldest, paginate
from vidshare.lib.validation import clean_text, require_text

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

SORTS = {
    **newest_oldest(Video),
    "popular": (Video.views.desc(), Video.created_at.desc(), Video.id.desc()),
    "title": (Video.title.asc(), Video.created_at.desc(), Video.id.desc()),
}


def _visible_to(actor: Actor | None):
    """Published videos, plus the actor's own drafts (or every draft for admins)."""
    if actor is None:
        return Video.is_published.is_(True)
    if actor.is_admin:
        return true()
    return or_(Video.is_published.is_(True), Video.owner_id == actor.id)


async def list_videos(
    db_session: AsyncSession,
    params: PageParams,
    actor: Actor | None = None,
    owner_id: UUID | None = None,
) -> Paginated[Video]:
    """List videos visible to ``actor``, optionally for a single channel.

    ``params.query`` matches the title case-insensitively.
    """
    statement = select(Video).where(_visible_to(actor))
    if owner_id is not None:
        statement = statement.where(Video.owner_id == owner_id)
    return await paginate(db_session, statement, params, SORTS, search_column=Video.title)


async def publish_video(
    db_session: AsyncSession,
    media: MediaStore,
    actor: Actor,
    title: str | None,
    description: str | None,
    video_file: Upload | None,
    thumbnail: Upload | None,
    duration: float | None = None,
) -> Video:
    title = require_text(title, "Title and description are required")
    description = require_text(description, "Title and description are required")
    if video_file is None or thumbnail is None:
        raise ValidationError("Video file and thumbnail are required")

    uploaded_video = await save_upload(media, video_file, "Video file", accept=VIDEO_TYPES, duration=duration)
    uploaded_thumbnail = await save_upload(media, thumbnail, "Thumbnail", accept=IMAGE_TYPES)

    video = Video(
        owner_id=actor.id,
        video_file=uploaded_video.secure_url,
        thumbnail=uploaded_thumbnail.secure_url,
        title=title,
        description=description,
        duration=uploaded_video.duration,
    )
    db_session.add(video)
    await db_session.commit()
    await db_session.refresh(video, attribute_names=["owner"])
    logger.info("User %s published video %s", actor.id, video.id)
    return video


async def ensure_visible(db_session: AsyncSession, video_id: UUID, actor: Actor | None = None) -> Video:
    """Load a video ``actor`` is allowed to see.

    Drafts are only visible to their owner and admins; anyone else gets the
    same 404 as for a missing video.
    """
    video = await ensure_exists(db_session, Video, video_id, "Video")
    if not video.is_published and (actor is None or not can_modify(actor, video)):
        raise NotFound("Video not found")
    return video


async def get_video(db_session: AsyncSession, video_id: UUID, actor: Actor | None = None) -> Video:
    return await ensure_visible(db_session, video_id, actor)


async def update_video(
    db_session: AsyncSession,
    media: MediaStore,
    actor: Actor,
    video_id: UUID,
    title: str | None = None,
    description: str | None = None,
    thumbnail: Upload | None = None,
) -> Video:
    title = clean_text(title)
    description = clean_text(description)
    has_thumbnail = thumbnail is not None and bool(getattr(thumbnail, "filename", None))
    if title is None and description is None and not has_thumbnail:
        raise ValidationError("No valid fields to update")

    video = await ensure_exists(db_session, Video, video_id, "Video")
    authorize(actor, video, "update")

    if has_thumbnail:
        video.thumbnail = (await save_upload(media, thumbnail, "Thumbnail", accept=IMAGE_TYPES)).secure_url
    if title is not None:
        video.title = title
    if description is not None:
        video.description = description

    await db_session.commit()
    return video


async def delete_video(db_session: AsyncSession, actor: Actor, video_id: UUID) -> None:
    """Delete a video with its comments, likes and playlist entries."""
    video = await ensure_exists(db_session, Video, video_id, "Video")
    authorize(actor, video, "delete")

    comment_ids = select(Comment.id).where(Comment.video_id == video_id)
    await db_session.execute(
        delete(Like).where(
            or_(
                and_(Like.target_kind == TargetKind.VIDEO, Like.target_id == video_id),
                and_(Like.target_kind == TargetKind.COMMENT, Like.target_id.in_(comment_ids)),
            )
        )
    )
    await db_session.execute(delete(Comment).where(Comment.video_id == video_id))
    await db_session.execute(delete(playlist_videos).where(playlist_videos.c.video_id == video_id))
    await db_session.delete(video)
    await db_session.commit()
    logger.info("User %s deleted video %s", actor.id, video_id)


async def toggle_publish(db_session: AsyncSession, actor: Actor, video_id: UUID) -> Video:
    video = await ensure_exists(db_session, Video, video_id, "Video")
    authorize(actor, video, "update")
    video.is_published = not video.is_published
    await db_session.commit()
    return video
