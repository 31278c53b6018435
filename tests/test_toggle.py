"""Tests for the create-or-delete toggle engine."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from vidshare.db.models import Subscription
from vidshare.lib import toggle
from vidshare.lib.toggle import ToggleResult, toggle_relation


async def _count(session) -> int:
    return (await session.execute(select(func.count()).select_from(Subscription))).scalar_one()


class TestToggleRelation:
    """Toggling flips between zero and one row for a key."""

    @pytest.mark.asyncio
    async def test_first_toggle_creates_row(self, db_session, alice, bob):
        result = await toggle_relation(db_session, Subscription, subscriber_id=alice.id, channel_id=bob.id)

        assert result.active is True
        assert result.record is not None
        assert result.record.channel_id == bob.id
        assert await _count(db_session) == 1

    @pytest.mark.asyncio
    async def test_second_toggle_removes_row(self, db_session, alice, bob):
        await toggle_relation(db_session, Subscription, subscriber_id=alice.id, channel_id=bob.id)
        result = await toggle_relation(db_session, Subscription, subscriber_id=alice.id, channel_id=bob.id)

        assert result == ToggleResult(active=False)
        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, db_session, alice, bob):
        await toggle_relation(db_session, Subscription, subscriber_id=alice.id, channel_id=bob.id)
        await toggle_relation(db_session, Subscription, subscriber_id=bob.id, channel_id=alice.id)

        assert await _count(db_session) == 2


class TestToggleConflict:
    """A lost insert race resolves to the relation being active."""

    @pytest.mark.asyncio
    async def test_unique_violation_returns_existing_row(self, db_session, alice, bob):
        winner = Subscription(subscriber_id=alice.id, channel_id=bob.id)
        db_session.add(winner)
        await db_session.commit()
        winner_id = winner.id

        real_find = toggle._find_existing
        calls = []

        async def stale_then_real(*args, **kwargs):
            calls.append(kwargs)
            if len(calls) == 1:
                # Simulates the row appearing between the lookup and the insert
                return None
            return await real_find(*args, **kwargs)

        with patch.object(toggle, "_find_existing", side_effect=stale_then_real):
            result = await toggle_relation(db_session, Subscription, subscriber_id=alice.id, channel_id=bob.id)

        assert result.active is True
        assert result.record is not None
        assert result.record.id == winner_id
        assert await _count(db_session) == 1

    @pytest.mark.asyncio
    async def test_conflict_without_row_for_key_is_raised(self):
        session = AsyncMock()
        session.add = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

        with (
            patch.object(toggle, "_find_existing", AsyncMock(return_value=None)),
            pytest.raises(IntegrityError),
        ):
            await toggle_relation(session, Subscription, subscriber_id="a", channel_id="b")

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_database_errors_propagate(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(OperationalError):
            await toggle_relation(session, Subscription, subscriber_id="a", channel_id="b")

        session.rollback.assert_awaited_once()


class TestConcurrentToggles:
    @pytest.mark.asyncio
    async def test_simultaneous_toggles_leave_at_most_one_row(self, session_maker, alice, bob):
        async def flip():
            async with session_maker() as session:
                return await toggle_relation(session, Subscription, subscriber_id=alice.id, channel_id=bob.id)

        results = await asyncio.gather(flip(), flip(), return_exceptions=True)

        # SQLite may refuse one writer outright instead of serializing them
        assert all(isinstance(r, ToggleResult | SQLAlchemyError) for r in results), results
        assert any(isinstance(r, ToggleResult) for r in results)
        async with session_maker() as session:
            assert await _count(session) <= 1
