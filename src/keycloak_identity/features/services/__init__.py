"""Query services for users, groups and tenants."""

from .base import KeycloakServiceBase
from .user_service import KeycloakUserService
from .group_service import KeycloakGroupService
from .tenant_service import KeycloakTenantService

__all__ = [
    "KeycloakServiceBase",
    "KeycloakUserService",
    "KeycloakGroupService",
    "KeycloakTenantService",
]
