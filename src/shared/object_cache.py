"""Group-namespaced object cache with TTL support."""

import copy
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from src.const import OBJECT_CACHE_MAX_SIZE
from src.shared.logging import LoggingManager

DEFAULT_GROUP = "default"


class ObjectCache:
    """In-process key-value store keyed by (group, key).

    Entries expire after their TTL and the least recently used entry is
    evicted once ``max_size`` is exceeded. A TTL of 0 means no expiry.
    Values are deep-copied on the way in and out, so callers never share
    mutable state with the cache.
    """

    def __init__(self, max_size: int = OBJECT_CACHE_MAX_SIZE):
        self.max_size = max_size
        self.cache: "OrderedDict[Tuple[str, str], Tuple[Any, Optional[float]]]" = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self._lock = threading.Lock()
        self.logger = LoggingManager.get_logger(__name__)

    def get(self, key: str, group: str = DEFAULT_GROUP) -> Optional[Any]:
        """Get a cached value, or None when absent or expired."""
        cache_key = (group, key)
        with self._lock:
            if cache_key in self.cache:
                value, expiration = self.cache[cache_key]
                if expiration is None or time.time() < expiration:
                    self.cache.move_to_end(cache_key)
                    self.hits += 1
                    return copy.deepcopy(value)
                del self.cache[cache_key]
                self.evictions += 1
            self.misses += 1
            return None

    def set(self, key: str, value: Any, group: str = DEFAULT_GROUP, ttl: int = 0) -> None:
        """Store a value under (group, key) for ``ttl`` seconds."""
        cache_key = (group, key)
        expiration = time.time() + ttl if ttl and ttl > 0 else None
        with self._lock:
            if cache_key in self.cache:
                del self.cache[cache_key]
            self.cache[cache_key] = (copy.deepcopy(value), expiration)
            while len(self.cache) > self.max_size:
                oldest_key, _ = self.cache.popitem(last=False)
                self.evictions += 1
                self.logger.debug(f"Object cache LRU eviction for {oldest_key[0]}:{oldest_key[1]}")

    def delete(self, key: str, group: str = DEFAULT_GROUP) -> bool:
        """Remove one entry. Returns True if it existed."""
        with self._lock:
            return self.cache.pop((group, key), None) is not None

    def flush_group(self, group: str) -> int:
        """Remove every entry in a group. Returns the number removed."""
        with self._lock:
            doomed = [cache_key for cache_key in self.cache if cache_key[0] == group]
            for cache_key in doomed:
                del self.cache[cache_key]
        self.logger.debug(f"Flushed {len(doomed)} entries from cache group '{group}'")
        return len(doomed)

    def flush(self) -> None:
        """Clear the cache and its statistics."""
        with self._lock:
            self.cache.clear()
            self.hits = 0
            self.misses = 0
            self.evictions = 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self.hits + self.misses
            return {
                'hits': self.hits,
                'misses': self.misses,
                'hit_rate': self.hits / total if total > 0 else 0,
                'evictions': self.evictions,
                'size': len(self.cache),
                'max_size': self.max_size
            }
