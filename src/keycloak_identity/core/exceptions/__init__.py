"""Exception hierarchy of keycloak-identity-provider."""

from .base import KeycloakIdentityError
from .not_found import NotFoundCondition, UserNotFound, GroupNotFound, TenantNotFound
from .provider import (
    ProviderFault,
    TransportError,
    RemoteNotFound,
    ResponseParseError,
    ConfigurationError,
    AmbiguousConfiguration,
    QueryError,
    NonUniqueResultError,
)

__all__ = [
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
]
