"""Identifier resolution and entity transformation."""

from .resolver import KeycloakIdentifierResolver
from .transformer import KeycloakEntityTransformer

__all__ = ["KeycloakIdentifierResolver", "KeycloakEntityTransformer"]
