"""Query result caching."""

from .query_cache import QueryCache, LruQueryCache, PassthroughQueryCache, create_query_cache

__all__ = ["QueryCache", "LruQueryCache", "PassthroughQueryCache", "create_query_cache"]
