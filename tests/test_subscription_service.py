"""Tests for channel subscriptions."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from vidshare.auth.identity import Actor
from vidshare.db.models import Subscription
from vidshare.db.services import subscription_service
from vidshare.lib.exceptions import InvalidOperation, NotFound
from vidshare.lib.pagination import PageParams


async def _subscription_count(session) -> int:
    return (await session.execute(select(func.count()).select_from(Subscription))).scalar_one()


class TestToggleSubscription:
    @pytest.mark.asyncio
    async def test_self_subscription_is_rejected(self, db_session, alice):
        with pytest.raises(InvalidOperation) as exc_info:
            await subscription_service.toggle_subscription(db_session, Actor.from_user(alice), alice.id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "You cannot subscribe to your own channel"
        assert await _subscription_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_unknown_channel_is_not_found(self, db_session, alice):
        with pytest.raises(NotFound, match="Channel not found"):
            await subscription_service.toggle_subscription(db_session, Actor.from_user(alice), uuid4())

    @pytest.mark.asyncio
    async def test_subscribe_then_unsubscribe(self, db_session, alice, bob):
        actor = Actor.from_user(alice)

        first = await subscription_service.toggle_subscription(db_session, actor, bob.id)
        assert first.active is True
        assert await subscription_service.is_subscribed(db_session, alice.id, bob.id)
        assert await subscription_service.count_subscribers(db_session, bob.id) == 1
        assert await subscription_service.count_subscriptions(db_session, alice.id) == 1

        second = await subscription_service.toggle_subscription(db_session, actor, bob.id)
        assert second.active is False
        assert not await subscription_service.is_subscribed(db_session, alice.id, bob.id)
        assert await _subscription_count(db_session) == 0


class TestSubscriptionListings:
    @pytest.mark.asyncio
    async def test_subscribers_of_a_channel(self, db_session, alice, bob, make_user):
        carol = await make_user("carol")
        await subscription_service.toggle_subscription(db_session, Actor.from_user(alice), bob.id)
        await subscription_service.toggle_subscription(db_session, Actor.from_user(carol), bob.id)

        page = await subscription_service.list_subscribers(
            db_session, bob.id, PageParams.build(1, None, default_limit=subscription_service.DEFAULT_LIMIT)
        )

        assert {sub.subscriber.username for sub in page.items} == {"alice", "carol"}
        assert page.meta.total == 2
        assert page.meta.limit == 20

    @pytest.mark.asyncio
    async def test_channels_a_user_follows(self, db_session, alice, bob):
        await subscription_service.toggle_subscription(db_session, Actor.from_user(alice), bob.id)

        page = await subscription_service.list_subscribed_channels(
            db_session, alice.id, PageParams.build(1, None, default_limit=subscription_service.DEFAULT_LIMIT)
        )

        assert [sub.channel.username for sub in page.items] == ["bob"]

    @pytest.mark.asyncio
    async def test_listing_for_unknown_channel(self, db_session):
        with pytest.raises(NotFound):
            await subscription_service.list_subscribers(db_session, uuid4(), PageParams.build(1, 5, default_limit=20))
