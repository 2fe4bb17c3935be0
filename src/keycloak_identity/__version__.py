"""Version information for keycloak-identity-provider."""

__version__ = "0.1.0"
