"""
Service account token acquisition.

The admin API is called with a bearer token obtained through the client
credentials grant of the configured client. Tokens are reused until shortly
before they expire.
"""
import asyncio
import logging
import time
from typing import Any, Dict, Optional

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from ...config.settings import KeycloakIdentitySettings
from ...core.exceptions import TransportError

logger = logging.getLogger(__name__)


class ServiceAccountTokenProvider:
    """Client credentials token provider backed by python-keycloak."""

    def __init__(
        self,
        settings: KeycloakIdentitySettings,
        openid_client: Optional[KeycloakOpenID] = None,
        refresh_margin_seconds: float = 30.0,
    ):
        self._settings = settings
        self._openid_client = openid_client
        self._refresh_margin = refresh_margin_seconds
        self._access_token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    def _get_openid_client(self) -> KeycloakOpenID:
        if self._openid_client is None:
            self._openid_client = KeycloakOpenID(
                server_url=f"{self._settings.server_url}/",
                realm_name=self._settings.realm_name,
                client_id=self._settings.client_id,
                client_secret_key=self._settings.client_secret.get_secret_value() or None,
                verify=not self._settings.disable_ssl_certificate_validation,
                timeout=int(self._settings.connection_timeout),
            )
        return self._openid_client

    async def get_access_token(self) -> str:
        async with self._lock:
            if self._access_token and time.monotonic() < self._expires_at:
                return self._access_token

            try:
                token: Dict[str, Any] = await self._get_openid_client().a_token(
                    grant_type="client_credentials"
                )
            except KeycloakError as e:
                logger.error(f"Service account login for client '{self._settings.client_id}' failed: {e}")
                raise TransportError(
                    f"Unable to obtain access token for client '{self._settings.client_id}'",
                    status_code=getattr(e, "response_code", None),
                    context={"realm": self._settings.realm_name},
                ) from e

            access_token = token.get("access_token")
            if not access_token:
                raise TransportError(
                    f"Token endpoint returned no access token for client '{self._settings.client_id}'",
                    context={"realm": self._settings.realm_name},
                )

            expires_in = float(token.get("expires_in", 60))
            self._access_token = access_token
            self._expires_at = time.monotonic() + max(expires_in - self._refresh_margin, 0.0)
            logger.debug(f"Obtained service account token, valid for {expires_in:.0f}s")
            return access_token

    def invalidate(self) -> None:
        self._access_token = None
        self._expires_at = 0.0
