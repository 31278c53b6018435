from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.db.models import Subscription, User
from vidshare.db.services.guards import ensure_exists
from vidshare.lib.exceptions import InvalidOperation
from vidshare.lib.pagination import PageParams, Paginated, newest_oldest, paginate
from vidshare.lib.toggle import ToggleResult, toggle_relation

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

SORTS = newest_oldest(Subscription)


async def toggle_subscription(db_session: AsyncSession, actor: Actor, channel_id: UUID) -> ToggleResult[Subscription]:
    """Subscribe to ``channel_id``, or unsubscribe if already subscribed."""
    if channel_id == actor.id:
        raise InvalidOperation("You cannot subscribe to your own channel")

    await ensure_exists(db_session, User, channel_id, "Channel")

    result = await toggle_relation(db_session, Subscription, subscriber_id=actor.id, channel_id=channel_id)
    logger.info(
        "User %s %s channel %s",
        actor.id,
        "subscribed to" if result.active else "unsubscribed from",
        channel_id,
    )
    return result


async def is_subscribed(db_session: AsyncSession, subscriber_id: UUID, channel_id: UUID) -> bool:
    result = await db_session.execute(
        select(Subscription.id).where(
            and_(Subscription.subscriber_id == subscriber_id, Subscription.channel_id == channel_id)
        )
    )
    return result.first() is not None


async def count_subscribers(db_session: AsyncSession, channel_id: UUID) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(Subscription).where(Subscription.channel_id == channel_id)
    )
    return result.scalar() or 0


async def count_subscriptions(db_session: AsyncSession, subscriber_id: UUID) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(Subscription).where(Subscription.subscriber_id == subscriber_id)
    )
    return result.scalar() or 0


async def list_subscribers(db_session: AsyncSession, channel_id: UUID, params: PageParams) -> Paginated[Subscription]:
    """Subscriptions to ``channel_id``; each row carries its ``subscriber``."""
    await ensure_exists(db_session, User, channel_id, "Channel")
    statement = select(Subscription).where(Subscription.channel_id == channel_id)
    return await paginate(db_session, statement, params, SORTS)


async def list_subscribed_channels(db_session: AsyncSession, subscriber_id: UUID, params: PageParams) -> Paginated[Subscription]:
    """Subscriptions held by ``subscriber_id``; each row carries its ``channel``."""
    await ensure_exists(db_session, User, subscriber_id, "User")
    statement = select(Subscription).where(Subscription.subscriber_id == subscriber_id)
    return await paginate(db_session, statement, params, SORTS)
