"""
Authorization hooks of the host engine.

The provider asks the host engine whether the current caller may read each
entity it is about to return. Hosts implement AuthorizationContext; the
permissive default grants everything.
"""
from enum import Enum
from typing import Optional, Protocol, runtime_checkable


class Permission(str, Enum):
    READ = "READ"


class Resource(str, Enum):
    USER = "USER"
    GROUP = "GROUP"
    TENANT = "TENANT"


@runtime_checkable
class AuthorizationContext(Protocol):
    """Current caller as seen by the host engine."""

    @property
    def authenticated_user_id(self) -> Optional[str]:
        """Id of the authenticated user, None for system calls."""
        ...

    async def is_authorized(self, permission: Permission, resource: Resource, resource_id: str) -> bool:
        """Check whether the caller holds permission on the resource instance."""
        ...


class PermissiveAuthorizationContext:
    """Grants every permission; used when the host supplies no context."""

    def __init__(self, authenticated_user_id: Optional[str] = None):
        self._authenticated_user_id = authenticated_user_id

    @property
    def authenticated_user_id(self) -> Optional[str]:
        return self._authenticated_user_id

    async def is_authorized(self, permission: Permission, resource: Resource, resource_id: str) -> bool:
        return True
