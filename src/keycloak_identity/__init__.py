"""
keycloak-identity-provider: user, group and tenant queries for a workflow
engine, answered from the Keycloak admin REST API.
"""

from .__version__ import __version__
from .config.settings import KeycloakIdentitySettings
from .config.logging_config import setup_logging
from .core.entities import User, Group, GroupType, Tenant
from .core.exceptions import (
    KeycloakIdentityError,
    NotFoundCondition,
    UserNotFound,
    GroupNotFound,
    TenantNotFound,
    ProviderFault,
    TransportError,
    RemoteNotFound,
    ResponseParseError,
    ConfigurationError,
    AmbiguousConfiguration,
    QueryError,
    NonUniqueResultError,
)
from .features.authorization import AuthorizationContext, PermissiveAuthorizationContext, Permission, Resource
from .features.queries import UserQuery, GroupQuery, TenantQuery, Direction
from .provider import KeycloakIdentityProvider

__all__ = [
    "__version__",
    "KeycloakIdentitySettings",
    "setup_logging",
    "User",
    "Group",
    "GroupType",
    "Tenant",
    "KeycloakIdentityError",
    "NotFoundCondition",
    "UserNotFound",
    "GroupNotFound",
    "TenantNotFound",
    "ProviderFault",
    "TransportError",
    "RemoteNotFound",
    "ResponseParseError",
    "ConfigurationError",
    "AmbiguousConfiguration",
    "QueryError",
    "NonUniqueResultError",
    "AuthorizationContext",
    "PermissiveAuthorizationContext",
    "Permission",
    "Resource",
    "UserQuery",
    "GroupQuery",
    "TenantQuery",
    "Direction",
    "KeycloakIdentityProvider",
]
