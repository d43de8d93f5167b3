"""
Instance cache - one snapshot of every record per model.

Snapshots are loaded lazily on first use and kept for the lifetime of
the registry. There is no eviction and no per-model invalidation; drop the
whole registry with clear() when the process (or test) is done with it.
"""

import logging
import threading
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class RegistryStats(BaseModel):
    """Statistics about instance cache usage"""
    hits: int = 0
    loads: int = 0
    failed_loads: int = 0
    size: int = 0
    records: int = 0

    @property
    def hit_rate(self) -> float:
        """Share of snapshot reads served without a load"""
        total = self.hits + self.loads
        return self.hits / total if total > 0 else 0.0


class _CacheEntry:
    """Lock plus the (possibly not yet loaded) snapshot for one model"""

    __slots__ = ("lock", "records")

    def __init__(self):
        self.lock = threading.Lock()
        self.records: Optional[Tuple[Any, ...]] = None


class InstanceRegistry:
    """
    Per-model snapshot cache.

    Features:
    - At most one successful load per key, even with concurrent first reads
    - Failed loads are not cached; the next read tries again
    - Snapshots are immutable tuples in load order
    """

    def __init__(self):
        self._entries: Dict[Hashable, _CacheEntry] = {}
        self._lock = threading.Lock()

        # Statistics tracking
        self._stats = RegistryStats()

    def get_or_load(self, key: Hashable, loader: Callable[[], Iterable[Any]]) -> Tuple[Any, ...]:
        """
        Return the snapshot for ``key``, calling ``loader`` if there is none yet.

        Args:
            key: Cache key (usually the model class)
            loader: Zero-argument callable returning every record

        Returns:
            Tuple of records in the order the loader produced them
        """
        entry = self._entry(key)

        records = entry.records
        if records is not None:
            self._stats.hits += 1
            return records

        with entry.lock:
            # Another thread may have loaded while we waited
            if entry.records is not None:
                self._stats.hits += 1
                return entry.records

            name = _key_name(key)
            try:
                loaded = tuple(loader())
            except Exception as e:
                self._stats.failed_loads += 1
                logger.error(f"Failed to load instances for {name}: {e}")
                raise

            entry.records = loaded
            self._stats.loads += 1
            logger.info(f"Cached {len(loaded)} {name} instances for lookups")
            return loaded

    def peek(self, key: Hashable) -> Optional[Tuple[Any, ...]]:
        """Return the snapshot for ``key`` without loading it."""
        entry = self._entries.get(key)
        return entry.records if entry else None

    def is_loaded(self, key: Hashable) -> bool:
        return self.peek(key) is not None

    def loaded_keys(self) -> List[Hashable]:
        return [key for key, entry in self._snapshot() if entry.records is not None]

    def clear(self) -> None:
        """Drop every snapshot and reset stats."""
        with self._lock:
            self._entries.clear()
            self._stats = RegistryStats()

    def get_stats(self) -> RegistryStats:
        """
        Get cache usage statistics.

        Returns:
            RegistryStats with hits, loads, failed loads, cached models and records
        """
        loaded = [entry.records for _, entry in self._snapshot() if entry.records is not None]
        self._stats.size = len(loaded)
        self._stats.records = sum(len(records) for records in loaded)
        return self._stats

    def _snapshot(self) -> List[Tuple[Hashable, _CacheEntry]]:
        with self._lock:
            return list(self._entries.items())

    def _entry(self, key: Hashable) -> _CacheEntry:
        entry = self._entries.get(key)
        if entry is None:
            with self._lock:
                entry = self._entries.setdefault(key, _CacheEntry())
        return entry


def _key_name(key: Hashable) -> str:
    return getattr(key, "__name__", repr(key))
