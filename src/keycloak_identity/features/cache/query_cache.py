"""Query result caches.

Results are cached per query snapshot. Entries expire after a fixed time
and the least recently used entry is evicted once the capacity is reached.
Two concurrent misses for the same key may both load; the later put wins.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Generic, Hashable, Optional, Protocol, TypeVar, runtime_checkable

from ...config.settings import KeycloakIdentitySettings

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@runtime_checkable
class QueryCache(Protocol[K, V]):
    """Cache of query results keyed by query snapshots."""

    async def get_or_load(self, key: K, loader: Callable[[], Awaitable[V]]) -> V:
        """Return the cached value for key, loading and storing it on a miss."""
        ...

    def invalidate_all(self) -> None:
        ...


@dataclass
class CacheEntry(Generic[V]):
    value: V
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class LruQueryCache(Generic[K, V]):
    """Thread-safe, size bounded cache with time based expiration."""

    def __init__(
        self,
        max_size: int,
        expire_after_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        name: str = "query",
    ):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._expire_after = expire_after_seconds
        self._clock = clock
        self._name = name
        self._entries: "OrderedDict[K, CacheEntry[V]]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0, "evictions": 0, "expired": 0}

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._stats["expired"] += 1
                self._stats["misses"] += 1
                return None
            self._entries.move_to_end(key)
            self._stats["hits"] += 1
            return entry.value

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(value, self._clock() + self._expire_after)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
                self._stats["evictions"] += 1

    async def get_or_load(self, key: K, loader: Callable[[], Awaitable[V]]) -> V:
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"{self._name} cache hit for {key}")
            return cached
        value = await loader()
        self.put(key, value)
        return value

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._stats)


class PassthroughQueryCache(Generic[K, V]):
    """Used when caching is disabled: always loads."""

    async def get_or_load(self, key: K, loader: Callable[[], Awaitable[V]]) -> V:
        return await loader()

    def invalidate_all(self) -> None:
        pass


def create_query_cache(settings: KeycloakIdentitySettings, name: str) -> QueryCache:
    """Build the cache configured by settings for one entity kind."""
    if not settings.cache_enabled:
        return PassthroughQueryCache()
    logger.info(
        f"{name} query cache enabled: max_size={settings.max_cache_size}, "
        f"expiration={settings.cache_expiration_timeout_min}min"
    )
    return LruQueryCache(
        max_size=settings.max_cache_size,
        expire_after_seconds=settings.cache_expiration_seconds,
        name=name,
    )
