from __future__ import annotations

import logging

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.db.models import Comment, Like, LikeTarget, TargetKind, Tweet, Video
from vidshare.db.services import video_service
from vidshare.db.services.guards import ensure_exists
from vidshare.lib.pagination import PageParams, Paginated, newest_oldest, paginate
from vidshare.lib.toggle import ToggleResult, toggle_relation

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

TARGET_MODELS = {
    TargetKind.VIDEO: (Video, "Video"),
    TargetKind.COMMENT: (Comment, "Comment"),
    TargetKind.TWEET: (Tweet, "Tweet"),
}

SORTS = newest_oldest(Like)


async def _ensure_likeable(db_session: AsyncSession, actor: Actor, target: LikeTarget) -> None:
    # Drafts and their comments are only likeable by the owner and admins
    if target.kind is TargetKind.VIDEO:
        await video_service.ensure_visible(db_session, target.id, actor)
        return
    model, label = TARGET_MODELS[target.kind]
    record = await ensure_exists(db_session, model, target.id, label)
    if target.kind is TargetKind.COMMENT:
        await video_service.ensure_visible(db_session, record.video_id, actor)


async def toggle_like(db_session: AsyncSession, actor: Actor, target: LikeTarget) -> ToggleResult[Like]:
    """Like ``target``, or remove the like if it already exists."""
    await _ensure_likeable(db_session, actor, target)

    result = await toggle_relation(
        db_session,
        Like,
        liked_by_id=actor.id,
        target_kind=target.kind,
        target_id=target.id,
    )
    logger.info("User %s %s %s %s", actor.id, "liked" if result.active else "unliked", target.kind.value, target.id)
    return result


async def count_likes(db_session: AsyncSession, target: LikeTarget) -> int:
    result = await db_session.execute(
        select(func.count())
        .select_from(Like)
        .where(and_(Like.target_kind == target.kind, Like.target_id == target.id))
    )
    return result.scalar() or 0


async def list_liked_videos(db_session: AsyncSession, actor: Actor, params: PageParams) -> Paginated[Video]:
    """Published videos the actor has liked, most recently liked first."""
    statement = (
        select(Video)
        .join(Like, and_(Like.target_kind == TargetKind.VIDEO, Like.target_id == Video.id))
        .where(Like.liked_by_id == actor.id, Video.is_published.is_(True))
    )
    return await paginate(db_session, statement, params, SORTS, search_column=Video.title)
