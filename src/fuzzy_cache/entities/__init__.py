"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. Configuration contracts live in the dto package.

Entities should have:
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntry
from .cache_match import CachedValue, CacheHitKind, CacheHitMeta, MatchResult, ScoreResult
from .outcome import Failure, Outcome, Success, capture

__all__ = [
    "CacheEntry",
    "CachedValue",
    "CacheHitKind",
    "CacheHitMeta",
    "MatchResult",
    "ScoreResult",
    "Failure",
    "Outcome",
    "Success",
    "capture",
]
