"""Authorization context used during post-processing."""

from .context import Permission, Resource, AuthorizationContext, PermissiveAuthorizationContext

__all__ = ["Permission", "Resource", "AuthorizationContext", "PermissiveAuthorizationContext"]
