"""Lookup miss conditions.

These are raised by the identifier resolver and recovered by the query
services, which turn them into empty results.
"""

from typing import Any, Dict, Optional

from .base import KeycloakIdentityError


class NotFoundCondition(KeycloakIdentityError):
    """A logical identifier has no counterpart in Keycloak."""

    entity_kind = "entity"

    def __init__(
        self,
        identifier: Optional[str],
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.identifier = identifier
        super().__init__(
            message or f"{self.entity_kind.capitalize()} '{identifier}' not found",
            details={"identifier": identifier, **(details or {})},
        )


class UserNotFound(NotFoundCondition):
    entity_kind = "user"


class GroupNotFound(NotFoundCondition):
    entity_kind = "group"


class TenantNotFound(NotFoundCondition):
    entity_kind = "tenant"
