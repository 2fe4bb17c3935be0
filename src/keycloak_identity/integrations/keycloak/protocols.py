"""
Protocol definitions for the Keycloak admin API integration.

Services depend on these protocols so the transport can be replaced,
for example by an in-memory fake in tests.
"""
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

QueryParams = Union[Mapping[str, str], Sequence[Tuple[str, str]]]


@runtime_checkable
class KeycloakTransportProtocol(Protocol):
    """Read-only access to the realm's admin REST API."""

    async def get_json(self, path: str, params: Optional[QueryParams] = None) -> Any:
        """GET a path relative to the realm admin URL and decode the JSON body.

        Raises:
            RemoteNotFound: The endpoint answered 404
            TransportError: Network failure or any other non-2xx status
            ResponseParseError: The body is not valid JSON
        """
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...


@runtime_checkable
class AccessTokenProviderProtocol(Protocol):
    """Supplies bearer tokens for admin API calls."""

    async def get_access_token(self) -> str:
        """Return a currently valid access token."""
        ...

    def invalidate(self) -> None:
        """Forget the cached token."""
        ...
