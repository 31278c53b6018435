from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.db.models import TWEET_MAX_LENGTH, Like, TargetKind, Tweet, User
from vidshare.db.services.guards import authorize, ensure_exists
from vidshare.lib.pagination import PageParams, Paginated, newest_oldest, paginate
from vidshare.lib.validation import require_text

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

SORTS = newest_oldest(Tweet)

TOO_LONG = f"Tweet content must be at most {TWEET_MAX_LENGTH} characters"


async def create_tweet(db_session: AsyncSession, actor: Actor, content: str | None) -> Tweet:
    content = require_text(content, "Tweet content is required", TWEET_MAX_LENGTH, TOO_LONG)

    tweet = Tweet(owner_id=actor.id, content=content)
    db_session.add(tweet)
    await db_session.commit()
    await db_session.refresh(tweet, attribute_names=["owner"])
    return tweet


async def list_user_tweets(db_session: AsyncSession, user_id: UUID, params: PageParams) -> Paginated[Tweet]:
    await ensure_exists(db_session, User, user_id, "User")
    statement = select(Tweet).where(Tweet.owner_id == user_id)
    return await paginate(db_session, statement, params, SORTS, search_column=Tweet.content)


async def update_tweet(db_session: AsyncSession, actor: Actor, tweet_id: UUID, content: str | None) -> Tweet:
    content = require_text(content, "Nothing to update", TWEET_MAX_LENGTH, TOO_LONG)

    tweet = await ensure_exists(db_session, Tweet, tweet_id, "Tweet")
    authorize(actor, tweet, "update")

    tweet.content = content
    await db_session.commit()
    return tweet


async def delete_tweet(db_session: AsyncSession, actor: Actor, tweet_id: UUID) -> None:
    tweet = await ensure_exists(db_session, Tweet, tweet_id, "Tweet")
    authorize(actor, tweet, "delete")

    await db_session.execute(
        delete(Like).where(and_(Like.target_kind == TargetKind.TWEET, Like.target_id == tweet_id))
    )
    await db_session.delete(tweet)
    await db_session.commit()
    logger.info("User %s deleted tweet %s", actor.id, tweet_id)
