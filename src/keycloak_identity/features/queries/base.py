"""
Base class of the fluent identity queries.

A query collects filters, ordering and paging, and hands itself to an
executor coroutine when one of the execution methods is awaited. The
executor works on a frozen snapshot of the query, never on the live object.
"""
from abc import ABC
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from .ordering import Direction, QueryOrderingProperty, QueryProperty
from ...config.constants import MAX_RESULTS_UNBOUNDED
from ...core.exceptions import NonUniqueResultError, QueryError

T = TypeVar("T")
Q = TypeVar("Q", bound="AbstractQuery")


def require_value(value, name: str):
    """Reject None filter arguments."""
    if value is None:
        raise QueryError(f"Provided {name} is null")
    return value


def require_values(values: Sequence, name: str) -> tuple:
    require_value(values, name)
    for value in values:
        require_value(value, name)
    return tuple(values)


class AbstractQuery(ABC, Generic[T]):
    """Filter, ordering and paging state shared by all query kinds."""

    def __init__(self, executor: Optional[Callable[["AbstractQuery"], Awaitable[List[T]]]] = None):
        self._executor = executor
        self.ordering_properties: List[QueryOrderingProperty] = []
        self.first_result = 0
        self.max_results = MAX_RESULTS_UNBOUNDED

    def order_by(self: Q, query_property: QueryProperty) -> Q:
        """Append an ascending ordering key; asc()/desc() change its direction."""
        self.ordering_properties.append(QueryOrderingProperty(query_property))
        return self

    def asc(self: Q) -> Q:
        return self._direction(Direction.ASCENDING)

    def desc(self: Q) -> Q:
        return self._direction(Direction.DESCENDING)

    def _direction(self: Q, direction: Direction) -> Q:
        if not self.ordering_properties:
            raise QueryError(
                f"Invalid query usage: cannot set direction '{direction.value}' "
                "before an order_by_* call"
            )
        self.ordering_properties[-1] = self.ordering_properties[-1].with_direction(direction)
        return self

    async def _execute(self, first_result: int, max_results: int) -> List[T]:
        if self._executor is None:
            raise QueryError("Query has no executor; create it through the identity provider")
        if first_result < 0 or max_results < 0:
            raise QueryError("first_result and max_results must not be negative")
        self.first_result = first_result
        self.max_results = max_results
        return await self._executor(self)

    async def list(self) -> List[T]:
        """Execute without paging."""
        return await self._execute(0, MAX_RESULTS_UNBOUNDED)

    async def list_page(self, first_result: int, max_results: int) -> List[T]:
        """Execute and return at most max_results entities after first_result."""
        return await self._execute(first_result, max_results)

    async def count(self) -> int:
        return len(await self.list())

    async def single_result(self) -> Optional[T]:
        """Execute expecting at most one entity.

        Raises:
            NonUniqueResultError: More than one entity matched
        """
        results = await self.list()
        if len(results) > 1:
            raise NonUniqueResultError(
                f"Query returns {len(results)} results instead of max 1",
                details={"count": len(results)},
            )
        return results[0] if results else None
