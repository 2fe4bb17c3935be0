"""Keycloak admin REST API integration."""

from .protocols import KeycloakTransportProtocol, AccessTokenProviderProtocol
from .http_client import KeycloakRestClient
from .token_provider import ServiceAccountTokenProvider

__all__ = [
    "KeycloakTransportProtocol",
    "AccessTokenProviderProtocol",
    "KeycloakRestClient",
    "ServiceAccountTokenProvider",
]
