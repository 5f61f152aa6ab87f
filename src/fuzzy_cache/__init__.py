"""Fuzzy Cache - result caching for expensive async computations with fuzzy matching.

A cached result computed for one parameter set can satisfy a similar
request, using per-field rules: embedding similarity, normalized-URL
equality, and "more is better" ordering. Failures are cached too.

Layers:
    - protocols: Interface contracts (EntryStore, EmbeddingProvider)
    - repositories: Entry store and embedding provider implementations
    - services: Embedding memoization and the caching wrappers
    - matching: Candidate scoring and selection
    - dto: Configuration contracts (CachingConfig, fuzzy specs)
    - entities: Domain models (internal)

Usage:
    ```python
    from fuzzy_cache import CachingConfig, FuzzyCacheService, MoreIsBetter
    from fuzzy_cache.repositories import OllamaEmbeddingProvider

    cache = FuzzyCacheService.create(OllamaEmbeddingProvider.create())
    cached = cache.with_caching_meta(
        answer,
        CachingConfig(cache_name="answers", fuzzy_params={"level": MoreIsBetter()}),
    )
    result = await cached({"question": "...", "level": 2})
    print(result.value, result.cache.kind)
    ```
"""

from fuzzy_cache.config import DEFAULT_TTL_MILLIS, get_settings, settings
from fuzzy_cache.dto import CachingConfig, CosineSimilarity, ExactURL, FuzzyFieldSpec, FuzzyParamsSpec, MoreIsBetter
from fuzzy_cache.entities import (
    CacheEntry,
    CachedValue,
    CacheHitKind,
    CacheHitMeta,
    Failure,
    MatchResult,
    Outcome,
    ScoreResult,
    Success,
)
from fuzzy_cache.errors import CacheConfigError, EmbeddingProviderError, FuzzyCacheError
from fuzzy_cache.logging_config import configure_logging
from fuzzy_cache.matching import cosine_similarity, match_best_entry, normalize_url, score_entry
from fuzzy_cache.models import CacheStats
from fuzzy_cache.protocols import EmbeddingProvider, EntryStore
from fuzzy_cache.repositories import InMemoryEntryStore, LocalEmbeddingProvider, OllamaEmbeddingProvider
from fuzzy_cache.services import EmbeddingService, FuzzyCacheService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    "DEFAULT_TTL_MILLIS",
    "configure_logging",
    # Protocols (interfaces)
    "EntryStore",
    "EmbeddingProvider",
    # Services (business logic)
    "FuzzyCacheService",
    "EmbeddingService",
    "CacheStats",
    # Matching
    "normalize_url",
    "cosine_similarity",
    "score_entry",
    "match_best_entry",
    # Repositories
    "InMemoryEntryStore",
    "OllamaEmbeddingProvider",
    "LocalEmbeddingProvider",
    # Entities (domain models)
    "CacheEntry",
    "CachedValue",
    "CacheHitKind",
    "CacheHitMeta",
    "MatchResult",
    "ScoreResult",
    "Outcome",
    "Success",
    "Failure",
    # DTOs (configuration contracts)
    "CachingConfig",
    "ExactURL",
    "MoreIsBetter",
    "CosineSimilarity",
    "FuzzyFieldSpec",
    "FuzzyParamsSpec",
    # Errors
    "FuzzyCacheError",
    "CacheConfigError",
    "EmbeddingProviderError",
]
