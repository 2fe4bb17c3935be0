"""
HTTP transport for the Keycloak admin REST API.

Wraps a pooled httpx.AsyncClient and maps HTTP outcomes onto the library's
exception types: 404 becomes RemoteNotFound, any other non-2xx status or
network failure becomes TransportError and an undecodable body becomes
ResponseParseError.
"""
import logging
from typing import Any, Optional

import httpx

from .protocols import AccessTokenProviderProtocol, QueryParams
from .token_provider import ServiceAccountTokenProvider
from ...config.settings import KeycloakIdentitySettings
from ...core.exceptions import RemoteNotFound, ResponseParseError, TransportError

logger = logging.getLogger(__name__)


class KeycloakRestClient:
    """Authenticated, read-only client for the realm admin API."""

    def __init__(
        self,
        settings: KeycloakIdentitySettings,
        token_provider: Optional[AccessTokenProviderProtocol] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings
        self._token_provider = token_provider or ServiceAccountTokenProvider(settings)
        self._client = http_client
        self._owns_client = http_client is None

        logger.info(
            f"KeycloakRestClient initialized: admin_url={settings.admin_url}, "
            f"max_connections={settings.max_http_connections}, "
            f"verify_ssl={not settings.disable_ssl_certificate_validation}"
        )

    def _build_proxy(self) -> Optional[httpx.Proxy]:
        if not self._settings.proxy_uri:
            return None
        auth = None
        if self._settings.proxy_user:
            password = self._settings.proxy_password
            auth = (self._settings.proxy_user, password.get_secret_value() if password else "")
        return httpx.Proxy(self._settings.proxy_uri, auth=auth)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled httpx client."""
        if self._client is None:
            max_connections = self._settings.max_http_connections
            limits = httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(max_connections // 2, 1),
            )
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.connection_timeout),
                limits=limits,
                verify=not self._settings.disable_ssl_certificate_validation,
                proxy=self._build_proxy(),
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def get_json(self, path: str, params: Optional[QueryParams] = None) -> Any:
        client = await self._get_client()
        url = f"{self._settings.admin_url}{path}"
        token = await self._token_provider.get_access_token()

        try:
            response = await client.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"GET {path} failed: {e}")
            raise TransportError(
                f"Request to Keycloak failed: GET {path}",
                context={"path": path, "reason": str(e)},
            ) from e

        logger.debug(f"GET {path} params={params} -> {response.status_code}")

        if response.status_code == 404:
            raise RemoteNotFound(f"Keycloak resource not found: GET {path}", context={"path": path})
        if response.status_code == 401:
            # Token may have been revoked before its expiry
            self._token_provider.invalidate()
        if not response.is_success:
            logger.error(f"GET {path} returned HTTP {response.status_code}")
            raise TransportError(
                f"Keycloak returned HTTP {response.status_code}: GET {path}",
                status_code=response.status_code,
                context={"path": path, "body": response.text[:500]},
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"GET {path} returned a body that is not JSON")
            raise ResponseParseError(
                f"Invalid JSON from Keycloak: GET {path}", context={"path": path}
            ) from e

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed httpx AsyncClient")

    async def __aenter__(self) -> "KeycloakRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
