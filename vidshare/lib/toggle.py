"""Create-or-delete engine for boolean relations such as likes and subscriptions.

A relation is "active" when a row exists for its key. Toggling removes an
existing row or inserts a missing one. The table's unique constraint on the
key is the final arbiter under concurrency: if an insert loses the race to a
concurrent toggle, the conflict is treated as the relation already being
active and the winning row is returned. A conflict that leaves no row for the
key is re-raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


@dataclass
class ToggleResult(Generic[ModelT]):
    active: bool
    record: ModelT | None = None


async def _find_existing(db_session: AsyncSession, model: type[ModelT], criteria, *, for_update: bool = False):
    query = select(model).where(criteria)
    if for_update:
        query = query.with_for_update()
    result = await db_session.execute(query)
    return result.scalar_one_or_none()


async def toggle_relation(db_session: AsyncSession, model: type[ModelT], **key: Any) -> ToggleResult[ModelT]:
    """Flip the relation identified by ``key`` and commit.

    Args:
        db_session: Database session; committed on success, rolled back on failure
        model: Mapped class whose table carries a unique constraint over ``key``
        **key: Column values identifying the relation row

    Returns:
        ``ToggleResult(active=False)`` when a row was removed, otherwise
        ``ToggleResult(active=True, record=row)``
    """
    criteria = and_(*(getattr(model, column) == value for column, value in key.items()))

    try:
        existing = await _find_existing(db_session, model, criteria, for_update=True)
        if existing is not None:
            await db_session.execute(delete(model).where(criteria))
            await db_session.commit()
            logger.debug("Removed %s %s", model.__name__, key)
            return ToggleResult(active=False)

        record = model(**key)
        db_session.add(record)
        await db_session.commit()
    except IntegrityError:
        await db_session.rollback()
        winner = await _find_existing(db_session, model, criteria)
        if winner is None:
            # No row for the key, so the conflict was not a lost toggle race
            raise
        logger.info("Concurrent insert of %s %s; keeping the existing row", model.__name__, key)
        return ToggleResult(active=True, record=winner)
    except SQLAlchemyError:
        await db_session.rollback()
        raise

    logger.debug("Created %s %s", model.__name__, key)
    return ToggleResult(active=True, record=record)
