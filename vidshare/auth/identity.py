"""Actor resolution and entity reference parsing."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from litestar import Request
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.roles import ROLE_USER, get_role
from vidshare.auth.tokens import ACCESS, verify_token_of_type
from vidshare.config import Settings
from vidshare.db.models import User
from vidshare.lib.exceptions import InvalidReference, Unauthenticated

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


@dataclass(frozen=True)
class Actor:
    """The authenticated identity performing a request."""

    id: UUID
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return get_role(self.role).can_moderate

    @classmethod
    def from_user(cls, user: User) -> Actor:
        return cls(id=user.id, role=user.role)


def parse_reference(value: str | UUID, name: str) -> UUID:
    """Parse an entity id from a path or query parameter.

    Raises:
        InvalidReference: ``value`` is not a well-formed id.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (AttributeError, TypeError, ValueError) as exc:
        raise InvalidReference(f"Invalid {name}") from exc


def extract_access_token(request: Request) -> str | None:
    """Read the bearer token, falling back to the access token cookie."""
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(ACCESS_COOKIE) or None


async def provide_actor(request: Request, db_session: AsyncSession, settings: Settings) -> Actor | None:
    """Resolve the request's actor, or ``None`` for anonymous callers."""
    token = extract_access_token(request)
    if token is None:
        return None

    user_id = verify_token_of_type(token, settings.secret_key, ACCESS)
    if user_id is None:
        return None

    user = await db_session.get(User, user_id)
    if user is None:
        return None
    return Actor.from_user(user)


async def provide_current_actor(actor: Actor | None) -> Actor:
    """Like ``provide_actor`` but rejects anonymous callers."""
    if actor is None:
        raise Unauthenticated("Unauthorized request")
    return actor
