from __future__ import annotations

from litestar import Controller, Response, get, post
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor, parse_reference
from vidshare.controllers.helpers import ListQuery
from vidshare.db.models import Subscription, User
from vidshare.db.services import subscription_service
from vidshare.lib.responses import envelope
from vidshare.schemas import OwnerOut, SubscriberOut, SubscriptionOut


def _listing(user: User, subscription: Subscription) -> SubscriberOut:
    return SubscriberOut(**OwnerOut.model_validate(user).model_dump(), subscribed_at=subscription.created_at)


class SubscriptionController(Controller):
    path = "/subscriptions"

    @post("/c/{channel_id:str}/toggle")
    async def toggle_subscription(self, db_session: AsyncSession, current_actor: Actor, channel_id: str) -> Response:
        result = await subscription_service.toggle_subscription(
            db_session, current_actor, parse_reference(channel_id, "channelId")
        )
        if not result.active:
            return envelope({"subscribed": False}, "Unsubscribed successfully")
        return envelope(
            {
                "subscribed": True,
                "subscription": SubscriptionOut.model_validate(result.record) if result.record else None,
            },
            "Subscribed successfully",
            HTTP_201_CREATED,
        )

    @get("/c/{channel_id:str}/subscribers")
    async def subscribers(self, db_session: AsyncSession, list_query: ListQuery, channel_id: str) -> Response:
        page = await subscription_service.list_subscribers(
            db_session,
            parse_reference(channel_id, "channelId"),
            list_query.params(subscription_service.DEFAULT_LIMIT),
        )
        data = {"subscribers": [_listing(sub.subscriber, sub) for sub in page.items], "meta": page.meta}
        return envelope(data, "Subscribers fetched successfully")

    @get("/u/{subscriber_id:str}/channels")
    async def subscribed_channels(
        self, db_session: AsyncSession, list_query: ListQuery, subscriber_id: str
    ) -> Response:
        page = await subscription_service.list_subscribed_channels(
            db_session,
            parse_reference(subscriber_id, "subscriberId"),
            list_query.params(subscription_service.DEFAULT_LIMIT),
        )
        data = {"channels": [_listing(sub.channel, sub) for sub in page.items], "meta": page.meta}
        return envelope(data, "Subscribed channels fetched successfully")
