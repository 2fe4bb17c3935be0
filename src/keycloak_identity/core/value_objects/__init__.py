"""Value objects of keycloak-identity-provider."""

from .group_path import GroupPath
from .identity_strategy import (
    UserIdStrategy,
    ById,
    ByEmail,
    ByUsername,
    ByCustomAttribute,
    ContainerIdStrategy,
    GroupById,
    ByPath,
)

__all__ = [
    "GroupPath",
    "UserIdStrategy",
    "ById",
    "ByEmail",
    "ByUsername",
    "ByCustomAttribute",
    "ContainerIdStrategy",
    "GroupById",
    "ByPath",
]
