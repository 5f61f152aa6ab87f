from dataclasses import dataclass

from fuzzy_cache.entities import CacheHitKind


@dataclass
class CacheStats:
    """Track lookup outcomes for a FuzzyCacheService."""

    total_lookups: int = 0
    exact_hits: int = 0
    fuzzy_hits: int = 0
    misses: int = 0
    failures_replayed: int = 0
    total_lookup_time_ms: float = 0.0

    @property
    def hits(self) -> int:
        return self.exact_hits + self.fuzzy_hits

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_lookups == 0:
            return 0.0
        return self.hits / self.total_lookups

    @property
    def avg_lookup_time_ms(self) -> float:
        """Calculate average lookup time."""
        if self.total_lookups == 0:
            return 0.0
        return self.total_lookup_time_ms / self.total_lookups

    def record_hit(self, kind: CacheHitKind, lookup_time_ms: float) -> None:
        """Record an exact or fuzzy cache hit."""
        self.total_lookups += 1
        if kind is CacheHitKind.EXACT:
            self.exact_hits += 1
        else:
            self.fuzzy_hits += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_miss(self, lookup_time_ms: float) -> None:
        """Record a cache miss."""
        self.total_lookups += 1
        self.misses += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_failure_replay(self) -> None:
        """Record a hit that replayed a cached failure."""
        self.failures_replayed += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert stats to dictionary."""
        return {
            "total_lookups": self.total_lookups,
            "exact_hits": self.exact_hits,
            "fuzzy_hits": self.fuzzy_hits,
            "misses": self.misses,
            "failures_replayed": self.failures_replayed,
            "hit_rate": self.hit_rate,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
        }
