"""Existence and ownership checks run before any mutation."""

from __future__ import annotations

from typing import Protocol, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor
from vidshare.lib.exceptions import Forbidden, NotFound

ModelT = TypeVar("ModelT")


class Owned(Protocol):
    owner_id: UUID


async def ensure_exists(db_session: AsyncSession, model: type[ModelT], entity_id: UUID, label: str | None = None) -> ModelT:
    """Load an entity by primary key or fail with NotFound."""
    entity = await db_session.get(model, entity_id)
    if entity is None:
        raise NotFound(f"{label or model.__name__} not found")
    return entity


def can_modify(actor: Actor, entity: Owned) -> bool:
    return actor.id == entity.owner_id or actor.is_admin


def authorize(actor: Actor, entity: Owned, action: str) -> None:
    """Allow the entity's owner or an admin to perform ``action`` on it.

    Raises:
        Forbidden: Anyone else.
    """
    if not can_modify(actor, entity):
        raise Forbidden(f"Not authorized to {action} this {type(entity).__name__.lower()}")
