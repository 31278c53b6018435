"""Role definitions for the application."""

from __future__ import annotations

from dataclasses import dataclass

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class RoleDefinition:
    """A named role. Admins may modify content they do not own."""

    name: str
    display_name: str
    can_moderate: bool = False


USER = RoleDefinition(ROLE_USER, "User")
ADMIN = RoleDefinition(ROLE_ADMIN, "Administrator", can_moderate=True)

ROLES: dict[str, RoleDefinition] = {role.name: role for role in (USER, ADMIN)}


def get_role(name: str) -> RoleDefinition:
    """Look up a role by name, falling back to the plain user role."""
    return ROLES.get(name, USER)
