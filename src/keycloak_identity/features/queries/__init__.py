"""Fluent queries, ordering and cacheable snapshots."""

from .ordering import (
    Direction,
    UserQueryProperty,
    GroupQueryProperty,
    TenantQueryProperty,
    QueryOrderingProperty,
    EntityComparator,
    compare_nullable,
    sort_entities,
)
from .base import AbstractQuery
from .user_query import UserQuery
from .group_query import GroupQuery
from .tenant_query import TenantQuery
from .cacheable import (
    CacheableQuery,
    CacheableUserQuery,
    CacheableGroupQuery,
    CacheableTenantQuery,
)

__all__ = [
    "Direction",
    "UserQueryProperty",
    "GroupQueryProperty",
    "TenantQueryProperty",
    "QueryOrderingProperty",
    "EntityComparator",
    "compare_nullable",
    "sort_entities",
    "AbstractQuery",
    "UserQuery",
    "GroupQuery",
    "TenantQuery",
    "CacheableQuery",
    "CacheableUserQuery",
    "CacheableGroupQuery",
    "CacheableTenantQuery",
]
