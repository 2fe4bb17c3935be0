"""Ordering properties and the multi-key comparator."""

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")


class Direction(str, Enum):
    """Sort direction of one ordering key."""
    ASCENDING = "asc"
    DESCENDING = "desc"


class UserQueryProperty(str, Enum):
    ID = "id"
    EMAIL = "email"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"


class GroupQueryProperty(str, Enum):
    ID = "id"
    NAME = "name"
    TYPE = "type"


class TenantQueryProperty(str, Enum):
    ID = "id"
    NAME = "name"


QueryProperty = Union[UserQueryProperty, GroupQueryProperty, TenantQueryProperty, str]


@dataclass(frozen=True)
class QueryOrderingProperty:
    query_property: QueryProperty
    direction: Direction = Direction.ASCENDING

    def with_direction(self, direction: Direction) -> "QueryOrderingProperty":
        return QueryOrderingProperty(self.query_property, direction)


def compare_nullable(left: Optional[Any], right: Optional[Any]) -> int:
    """Three-way comparison where None sorts before any value."""
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


class EntityComparator:
    """Compares entities key by key following a query's ordering list.

    Properties without an accessor compare equal, so the next key decides.
    """

    def __init__(
        self,
        ordering: Sequence[QueryOrderingProperty],
        accessors: Dict[Any, Callable[[T], Optional[Any]]],
    ):
        self._ordering = list(ordering)
        self._accessors = accessors

    def __call__(self, left: T, right: T) -> int:
        for ordering in self._ordering:
            accessor = self._accessors.get(ordering.query_property)
            if accessor is None:
                continue
            result = compare_nullable(accessor(left), accessor(right))
            if result != 0:
                return -result if ordering.direction == Direction.DESCENDING else result
        return 0


def sort_entities(
    entities: Sequence[T],
    ordering: Sequence[QueryOrderingProperty],
    accessors: Dict[Any, Callable[[T], Optional[Any]]],
) -> List[T]:
    """Return entities sorted by ordering, stable for equal keys."""
    if not ordering:
        return list(entities)
    return sorted(entities, key=functools.cmp_to_key(EntityComparator(ordering, accessors)))
