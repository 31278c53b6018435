"""Request-scoped database sessions for vidshare.

Litestar cancels a handler when the client hangs up (an upload abandoned
halfway, a closed tab). advanced-alchemy normally closes the session when the
response is sent, which never happens for a cancelled request, so the
connection would stay checked out of the pool. Sessions here are handed out by
an async generator, letting the dependency cleanup roll back and close them.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

from advanced_alchemy._listeners import set_async_context
from advanced_alchemy.extensions.litestar import SQLAlchemyAsyncConfig
from advanced_alchemy.extensions.litestar._utils import (
    delete_aa_scope_state,
    get_aa_scope_state,
    set_aa_scope_state,
)
from sqlalchemy.ext.asyncio import AsyncSession

if TYPE_CHECKING:
    from litestar.datastructures import State
    from litestar.types import Scope

logger = logging.getLogger(__name__)


def _describe(scope: Scope) -> str:
    return f"{scope.get('method', scope.get('type', '?'))} {scope.get('path', '?')}"


class SafeSQLAlchemyAsyncConfig(SQLAlchemyAsyncConfig):
    """Async config whose request sessions are released when the request is cancelled."""

    def _scope_session(self, state: State, scope: Scope) -> AsyncSession:
        session: AsyncSession | None = get_aa_scope_state(scope, self.session_scope_key)
        if session is None:
            session = state[self.session_maker_app_state_key]()
            set_aa_scope_state(scope, self.session_scope_key, session)
        return session

    async def discard_session(self, scope: Scope, session: AsyncSession) -> None:
        """Roll back whatever the cancelled handler left open and close the session.

        The session is always removed from the scope afterwards so the
        before-send handler never sees it again.
        """
        try:
            if session.in_transaction():
                await session.rollback()
            await session.close()
        finally:
            delete_aa_scope_state(scope, self.session_scope_key)

    async def provide_session(self, state: State, scope: Scope) -> AsyncGenerator[AsyncSession, None]:
        session = self._scope_session(state, scope)
        set_async_context(True)

        try:
            yield session
        except asyncio.CancelledError:
            logger.warning("Request %s was cancelled; releasing its database session", _describe(scope))
            await self.discard_session(scope, session)
            raise


__all__ = ["SafeSQLAlchemyAsyncConfig"]
