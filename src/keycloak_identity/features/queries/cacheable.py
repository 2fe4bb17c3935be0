"""
Frozen snapshots of queries.

A snapshot copies every field that influences a query's result, so two
structurally identical queries produce equal, equally hashed snapshots and
can share a cache entry. Executors only read snapshots. A new query field
that changes results must be added here as well.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .group_query import GroupQuery
from .ordering import QueryOrderingProperty
from .tenant_query import TenantQuery
from .user_query import UserQuery
from ...config.constants import MAX_RESULTS_UNBOUNDED
from ...core.entities import GroupType


@dataclass(frozen=True)
class CacheableQuery:
    ordering_properties: Tuple[QueryOrderingProperty, ...] = ()
    first_result: int = 0
    max_results: int = MAX_RESULTS_UNBOUNDED

    @property
    def is_paged(self) -> bool:
        return self.first_result > 0 or self.max_results < MAX_RESULTS_UNBOUNDED

    def without_paging(self):
        """Key under which raw, unprocessed results are cached.

        Fetching does not depend on ordering or paging, so those are reset.
        """
        return type(self)(**{
            **self.__dict__,
            "ordering_properties": (),
            "first_result": 0,
            "max_results": MAX_RESULTS_UNBOUNDED,
        })


@dataclass(frozen=True)
class CacheableUserQuery(CacheableQuery):
    id: Optional[str] = None
    ids: Optional[Tuple[str, ...]] = None
    first_name: Optional[str] = None
    first_name_like: Optional[str] = None
    last_name: Optional[str] = None
    last_name_like: Optional[str] = None
    email: Optional[str] = None
    email_like: Optional[str] = None
    group_id: Optional[str] = None
    tenant_id: Optional[str] = None

    @classmethod
    def of(cls, query: UserQuery) -> "CacheableUserQuery":
        return cls(
            ordering_properties=tuple(query.ordering_properties),
            first_result=query.first_result,
            max_results=query.max_results,
            id=query.id,
            ids=query.ids,
            first_name=query.first_name,
            first_name_like=query.first_name_like,
            last_name=query.last_name,
            last_name_like=query.last_name_like,
            email=query.email,
            email_like=query.email_like,
            group_id=query.group_id,
            tenant_id=query.tenant_id,
        )


@dataclass(frozen=True)
class CacheableGroupQuery(CacheableQuery):
    id: Optional[str] = None
    ids: Optional[Tuple[str, ...]] = None
    name: Optional[str] = None
    name_like: Optional[str] = None
    type: Optional[GroupType] = None
    user_id: Optional[str] = None

    @classmethod
    def of(cls, query: GroupQuery) -> "CacheableGroupQuery":
        return cls(
            ordering_properties=tuple(query.ordering_properties),
            first_result=query.first_result,
            max_results=query.max_results,
            id=query.id,
            ids=query.ids,
            name=query.name,
            name_like=query.name_like,
            type=query.type,
            user_id=query.user_id,
        )


@dataclass(frozen=True)
class CacheableTenantQuery(CacheableQuery):
    id: Optional[str] = None
    ids: Optional[Tuple[str, ...]] = None
    name: Optional[str] = None
    name_like: Optional[str] = None
    user_id: Optional[str] = None
    group_id: Optional[str] = None

    @classmethod
    def of(cls, query: TenantQuery) -> "CacheableTenantQuery":
        return cls(
            ordering_properties=tuple(query.ordering_properties),
            first_result=query.first_result,
            max_results=query.max_results,
            id=query.id,
            ids=query.ids,
            name=query.name,
            name_like=query.name_like,
            user_id=query.user_id,
            group_id=query.group_id,
        )
