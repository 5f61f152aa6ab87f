"""Entry storage protocol.

Defines the interface for any backend that holds cache entries, grouped
by cache name. One store serves many logical caches.

Implementations can include:
- In-process memory (default)
- Anything else that can append and scan per-name sequences
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from fuzzy_cache.entities import CacheEntry


@runtime_checkable
class EntryStore(Protocol):
    """Protocol for cache entry storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from fuzzy_cache.protocols import EntryStore

        store: EntryStore = InMemoryEntryStore()
        ```
    """

    def get_all(self, cache_name: str) -> Sequence[CacheEntry]:
        """Get all entries stored under a cache name.

        Args:
            cache_name: The logical cache to read

        Returns:
            Snapshot of entries in insertion order; empty for an unknown name
        """
        ...

    def put(self, cache_name: str, entry: CacheEntry) -> None:
        """Append an entry to a cache.

        Appends never lose entries under concurrency. Duplicates are kept.

        Args:
            cache_name: The logical cache to append to
            entry: The entry to store
        """
        ...

    def count_all(self) -> int:
        """Count entries across all caches.

        Returns:
            Total number of stored entries
        """
        ...

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
