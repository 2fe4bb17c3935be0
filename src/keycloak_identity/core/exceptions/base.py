"""Base exceptions for keycloak-identity-provider.

All exceptions raised by the library inherit from KeycloakIdentityError and
carry an error code plus structured details for diagnostics.
"""

from typing import Any, Dict, Optional


class KeycloakIdentityError(Exception):
    """Base exception for all identity provider errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
