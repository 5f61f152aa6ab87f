"""Memoized embedding lookups.

Wraps a raw EmbeddingProvider and remembers every vector it returns,
keyed by (text, model), for the lifetime of the process.
"""

import threading

import structlog

from fuzzy_cache.protocols import EmbeddingProvider

log = structlog.get_logger(__name__)

EmbeddingKey = tuple[str, str]


class EmbeddingService:
    """Process-wide embedding memoizer.

    The lock is held only around reads and writes of the map, never while
    the provider is awaited. Two lookups that miss on the same key at the
    same time may therefore both call the provider; the last write wins.
    Callers must not rely on exactly-once provider calls.

    Provider failures propagate unchanged and nothing is stored for them.

    Example:
        ```python
        embeddings = EmbeddingService.create(OllamaEmbeddingProvider.create())
        vector = await embeddings.embed("hello", "nomic-embed-text")
        ```
    """

    def __init__(self, provider: EmbeddingProvider) -> None:
        """Initialize the embedding service.

        Args:
            provider: Raw embedding provider to delegate misses to (required).
        """
        self._provider = provider
        self._vectors: dict[EmbeddingKey, list[float]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls, provider: EmbeddingProvider) -> "EmbeddingService":
        """Factory method to create EmbeddingService.

        Args:
            provider: Raw embedding provider (required).

        Returns:
            Configured EmbeddingService instance
        """
        return cls(provider=provider)

    async def embed(self, text: str, model: str) -> list[float]:
        """Return the embedding of ``text`` under ``model``.

        Args:
            text: The text to embed
            model: Embedding model name

        Returns:
            The embedding vector

        Raises:
            Exception: Whatever the provider raised on a miss
        """
        key = (text, model)

        with self._lock:
            cached = self._vectors.get(key)
            if cached is not None:
                self._hits += 1
        if cached is not None:
            log.debug("embedding.hit", model=model, text_length=len(text))
            return cached

        log.debug("embedding.miss", model=model, text_length=len(text))
        vector = list(await self._provider.encode(text, model))

        with self._lock:
            self._misses += 1
            self._vectors[key] = vector

        return vector

    def clear(self) -> None:
        """Forget every memoized vector."""
        with self._lock:
            self._vectors.clear()

    @property
    def size(self) -> int:
        """Number of memoized (text, model) pairs."""
        with self._lock:
            return len(self._vectors)

    def stats(self) -> dict:
        """Get memoizer statistics.

        Returns:
            Dictionary with entry, hit and miss counts
        """
        with self._lock:
            return {
                "entries": len(self._vectors),
                "hits": self._hits,
                "misses": self._misses,
            }

    @property
    def provider(self) -> EmbeddingProvider:
        """Get the underlying raw provider (for testing)."""
        return self._provider
