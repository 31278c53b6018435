from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.db.models import Comment, Like, TargetKind
from vidshare.db.services import video_service
from vidshare.db.services.guards import authorize, ensure_exists
from vidshare.lib.pagination import PageParams, Paginated, newest_oldest, paginate
from vidshare.lib.validation import require_text

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

SORTS = newest_oldest(Comment)


async def list_comments(
    db_session: AsyncSession, video_id: UUID, params: PageParams, actor: Actor | None = None
) -> Paginated[Comment]:
    """Comments on a video; a draft's comments are as hidden as the draft itself."""
    await video_service.ensure_visible(db_session, video_id, actor)
    statement = select(Comment).where(Comment.video_id == video_id)
    return await paginate(db_session, statement, params, SORTS, search_column=Comment.content)


async def add_comment(db_session: AsyncSession, actor: Actor, video_id: UUID, content: str | None) -> Comment:
    content = require_text(content, "Comment content is required")
    await video_service.ensure_visible(db_session, video_id, actor)

    comment = Comment(video_id=video_id, owner_id=actor.id, content=content)
    db_session.add(comment)
    await db_session.commit()
    await db_session.refresh(comment, attribute_names=["owner"])
    return comment


async def update_comment(db_session: AsyncSession, actor: Actor, comment_id: UUID, content: str | None) -> Comment:
    content = require_text(content, "Comment content is required")
    comment = await ensure_exists(db_session, Comment, comment_id, "Comment")
    authorize(actor, comment, "update")

    comment.content = content
    await db_session.commit()
    return comment


async def delete_comment(db_session: AsyncSession, actor: Actor, comment_id: UUID) -> None:
    comment = await ensure_exists(db_session, Comment, comment_id, "Comment")
    authorize(actor, comment, "delete")

    await db_session.execute(
        delete(Like).where(and_(Like.target_kind == TargetKind.COMMENT, Like.target_id == comment_id))
    )
    await db_session.delete(comment)
    await db_session.commit()
    logger.info("User %s deleted comment %s", actor.id, comment_id)
