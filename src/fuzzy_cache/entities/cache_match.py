"""Cache match domain entities."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .cache_entry import CacheEntry

T = TypeVar("T")


class CacheHitKind(str, Enum):
    """How a lookup was satisfied."""

    MISS = "miss"
    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class CacheHitMeta:
    """Metadata about a cache lookup.

    Attributes:
        kind: miss, exact or fuzzy
        score: Cumulative match strength of the winning entry; 0 for a miss.
               Only comparable with other scores from the same lookup.
    """

    kind: CacheHitKind
    score: float = 0.0

    @classmethod
    def miss(cls) -> "CacheHitMeta":
        return cls(kind=CacheHitKind.MISS, score=0.0)


@dataclass(frozen=True)
class ScoreResult:
    """Result of scoring one candidate against a request."""

    ok: bool
    score: float
    exact: bool

    @classmethod
    def rejected(cls) -> "ScoreResult":
        return cls(ok=False, score=0.0, exact=False)


@dataclass(frozen=True)
class MatchResult:
    """The best usable entry of a lookup and its hit metadata."""

    entry: CacheEntry
    hit_meta: CacheHitMeta


@dataclass(frozen=True)
class CachedValue(Generic[T]):
    """Return value of a wrapper built with ``with_caching_meta``."""

    value: T
    cache: CacheHitMeta
