"""Fatal provider, configuration and query errors."""

from typing import Any, Dict, Optional

from .base import KeycloakIdentityError


class ProviderFault(KeycloakIdentityError):
    """Remote failure that aborts the current query."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
        self.context = context or {}


class TransportError(ProviderFault):
    """Network failure or non-2xx answer from the Keycloak admin API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details, context=context)
        self.status_code = status_code


class RemoteNotFound(TransportError):
    """HTTP 404 from the Keycloak admin API."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code=404, details=details, context=context)


class ResponseParseError(ProviderFault):
    """Response body is not JSON or not of the expected shape."""


class ConfigurationError(KeycloakIdentityError):
    """Configured value cannot be resolved against Keycloak."""


class AmbiguousConfiguration(ConfigurationError):
    """Configured value matches more than one Keycloak entity."""


class QueryError(KeycloakIdentityError):
    """Query was built or executed incorrectly."""


class NonUniqueResultError(QueryError):
    """single_result() matched more than one entity."""
