"""In-memory implementation of EntryStore.

Process-local storage: entries live until the process exits. It's the
default implementation and satisfies the EntryStore protocol.
"""

import threading

import structlog

from fuzzy_cache.entities import CacheEntry

log = structlog.get_logger(__name__)


class InMemoryEntryStore:
    """Lock-guarded map from cache name to an append-only entry list.

    This class satisfies the EntryStore protocol through structural
    typing - no explicit inheritance needed.

    Properties:
    - Appends are serialized, so concurrent puts never lose an entry
    - Reads return a snapshot tuple; later appends are not visible in it
    - No deduplication and no eviction: growth is unbounded
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._entries: dict[str, list[CacheEntry]] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "InMemoryEntryStore":
        """Factory method to create an empty InMemoryEntryStore.

        Returns:
            A new store with no caches
        """
        return cls()

    def get_all(self, cache_name: str) -> tuple[CacheEntry, ...]:
        """Get a snapshot of the entries stored under a cache name.

        Args:
            cache_name: The logical cache to read

        Returns:
            Entries in insertion order; empty tuple for an unknown name
        """
        with self._lock:
            return tuple(self._entries.get(cache_name, ()))

    def put(self, cache_name: str, entry: CacheEntry) -> None:
        """Append an entry to a cache.

        Args:
            cache_name: The logical cache to append to
            entry: The entry to store
        """
        with self._lock:
            self._entries.setdefault(cache_name, []).append(entry)
            size = len(self._entries[cache_name])
        log.debug("store.put", cache_name=cache_name, entries=size)

    def count_all(self) -> int:
        """Count entries across all caches.

        Returns:
            Total number of stored entries
        """
        with self._lock:
            return sum(len(entries) for entries in self._entries.values())

    def cache_names(self) -> list[str]:
        """List the names of caches that hold at least one entry."""
        with self._lock:
            return list(self._entries)

    def clear_all(self) -> int:
        """Drop every entry of every cache.

        Returns:
            Number of entries deleted
        """
        with self._lock:
            count = sum(len(entries) for entries in self._entries.values())
            self._entries.clear()
        return count

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with per-cache and total entry counts
        """
        with self._lock:
            per_cache = {name: len(entries) for name, entries in self._entries.items()}
        return {
            "backend": "memory",
            "total_entries": sum(per_cache.values()),
            "caches": per_cache,
        }
