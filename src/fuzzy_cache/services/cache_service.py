"""Fuzzy cache service for core business logic.

This service wraps async computations with fuzzy result caching by
coordinating the entry store (data access), the matcher (scoring) and the
embedding service (memoized vectors for similarity rules).
"""

import functools
import threading
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import replace
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel

from fuzzy_cache.dto import CachingConfig
from fuzzy_cache.entities import CacheEntry, CachedValue, CacheHitMeta, Outcome, capture
from fuzzy_cache.errors import CacheConfigError
from fuzzy_cache.matching import match_best_entry
from fuzzy_cache.models import CacheStats
from fuzzy_cache.protocols import EmbeddingProvider, EntryStore
from fuzzy_cache.repositories import InMemoryEntryStore

from .embedding_service import EmbeddingService

log = structlog.get_logger(__name__)

P = TypeVar("P")
T = TypeVar("T")

Clock = Callable[[], float]


def _epoch_millis() -> float:
    return time.time() * 1000


def _as_mapping(params: Any) -> dict[str, Any]:
    """Snapshot a parameter set as a plain dict for storage and scoring."""
    if isinstance(params, BaseModel):
        return params.model_dump()
    if isinstance(params, Mapping):
        return dict(params)
    raise TypeError(f"params must be a mapping or a pydantic model, got {type(params).__name__}")


class FuzzyCacheService:
    """Core fuzzy caching orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - EntryStore: where cache entries live
    - EmbeddingProvider (behind EmbeddingService): where vectors come from

    Wrapped functions keep their call signature. A cached failure is raised
    again exactly as the original call raised it.

    Example:
        ```python
        from fuzzy_cache.services import FuzzyCacheService
        from fuzzy_cache.repositories import OllamaEmbeddingProvider

        cache = FuzzyCacheService.create(OllamaEmbeddingProvider.create())

        cached_summarize = cache.with_caching(
            summarize,
            CachingConfig(
                cache_name="summaries",
                fuzzy_params={"url": ExactURL(exclude_hash=True)},
            ),
        )
        summary = await cached_summarize({"url": "https://example.com/#top"})
        ```
    """

    def __init__(
        self,
        store: EntryStore,
        embeddings: EmbeddingService,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            store: Entry storage backend (required).
            embeddings: Memoized embedding lookups (required).
            clock: Returns the current time in epoch milliseconds. Defaults to wall clock.
        """
        self._store = store
        self._embeddings = embeddings
        self._clock = clock or _epoch_millis
        self._stats = CacheStats()
        self._stats_lock = threading.Lock()

    @classmethod
    def create(
        cls,
        provider: EmbeddingProvider,
        store: EntryStore | None = None,
        clock: Clock | None = None,
    ) -> "FuzzyCacheService":
        """Factory method to create FuzzyCacheService with sensible defaults.

        Args:
            provider: Raw embedding provider (required).
            store: Entry store. If None, a fresh in-memory store is used.
            clock: Epoch-milliseconds clock. If None, uses wall clock.

        Returns:
            Configured FuzzyCacheService instance
        """
        return cls(
            store=store or InMemoryEntryStore.create(),
            embeddings=EmbeddingService.create(provider),
            clock=clock,
        )

    def with_caching(
        self,
        fn: Callable[[P], Awaitable[T]],
        config: CachingConfig | Mapping[str, Any],
    ) -> Callable[[P], Awaitable[T]]:
        """Wrap ``fn`` with fuzzy caching.

        Args:
            fn: Async computation taking a parameter set
            config: CachingConfig, or a dict that validates into one

        Returns:
            Async function with the same signature as ``fn``
        """
        cfg = self._validate_config(config)
        if not cfg.has_valid_ttl:
            return self._failing_wrapper(fn, cfg)

        @functools.wraps(fn)
        async def wrapper(params: P) -> T:
            outcome, _ = await self._lookup_or_compute(fn, cfg, params)
            return outcome.replay()

        return wrapper

    def with_caching_meta(
        self,
        fn: Callable[[P], Awaitable[T]],
        config: CachingConfig | Mapping[str, Any],
    ) -> Callable[[P], Awaitable[CachedValue[T]]]:
        """Wrap ``fn`` with fuzzy caching, returning hit metadata.

        A freshly computed result is reported as ``miss`` with score 0.
        When the selected entry holds a failure, that failure is raised
        and no metadata is returned for the call.

        Args:
            fn: Async computation taking a parameter set
            config: CachingConfig, or a dict that validates into one

        Returns:
            Async function returning CachedValue(value, cache)
        """
        cfg = self._validate_config(config)
        if not cfg.has_valid_ttl:
            return self._failing_wrapper(fn, cfg)

        @functools.wraps(fn)
        async def wrapper(params: P) -> CachedValue[T]:
            outcome, hit_meta = await self._lookup_or_compute(fn, cfg, params)
            return CachedValue(value=outcome.replay(), cache=hit_meta)

        return wrapper

    async def _lookup_or_compute(
        self,
        fn: Callable[[P], Awaitable[Any]],
        cfg: CachingConfig,
        params: P,
    ) -> tuple[Outcome, CacheHitMeta]:
        """Return the best cached outcome, or compute, store and return a new one."""
        request = _as_mapping(params)
        now = self._clock()
        entries = self._store.get_all(cfg.cache_name)

        start_time = time.perf_counter()
        match = await match_best_entry(
            now=now,
            ttl=cfg.effective_ttl_millis,
            params=request,
            entries=entries,
            fuzzy_params=cfg.fuzzy_params,
            embed=self._embeddings.embed,
        )
        lookup_time_ms = (time.perf_counter() - start_time) * 1000

        if match is not None:
            outcome = match.entry.outcome
            with self._stats_lock:
                self._stats.record_hit(match.hit_meta.kind, lookup_time_ms)
                if not outcome.is_success:
                    self._stats.record_failure_replay()
            log.info(
                "cache.hit",
                cache_name=cfg.cache_name,
                kind=match.hit_meta.kind.value,
                score=match.hit_meta.score,
                failure=not outcome.is_success,
            )
            return outcome, match.hit_meta

        with self._stats_lock:
            self._stats.record_miss(lookup_time_ms)
        log.info("cache.miss", cache_name=cfg.cache_name, candidates=len(entries))

        outcome = await capture(fn, params)
        self._store.put(cfg.cache_name, CacheEntry(params=request, outcome=outcome, created_at=now))
        log.debug("cache.stored", cache_name=cfg.cache_name, failure=not outcome.is_success)

        return outcome, CacheHitMeta.miss()

    def _failing_wrapper(self, fn: Callable[..., Any], cfg: CachingConfig) -> Callable[..., Awaitable[Any]]:
        message = f"ttl_millis must be positive, got {cfg.ttl_millis} for cache {cfg.cache_name!r}"
        log.error("cache.config_error", cache_name=cfg.cache_name, ttl_millis=cfg.ttl_millis)

        @functools.wraps(fn)
        async def wrapper(params: Any) -> Any:
            raise CacheConfigError(message)

        return wrapper

    @staticmethod
    def _validate_config(config: CachingConfig | Mapping[str, Any]) -> CachingConfig:
        if isinstance(config, CachingConfig):
            return config
        return CachingConfig.model_validate(config)

    def stats(self) -> CacheStats:
        """Get a snapshot of lookup statistics.

        Returns:
            Copy of the service's CacheStats
        """
        with self._stats_lock:
            return replace(self._stats)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with lookup, store and embedding statistics
        """
        stats: dict[str, Any] = dict(self.stats().to_dict())
        stats["store"] = self._store.get_stats()
        stats["embeddings"] = self._embeddings.stats()
        return stats

    @property
    def store(self) -> EntryStore:
        """Get the underlying entry store (for testing)."""
        return self._store

    @property
    def embeddings(self) -> EmbeddingService:
        """Get the underlying embedding service (for testing)."""
        return self._embeddings
