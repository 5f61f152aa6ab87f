"""Embedding provider protocol.

Defines the interface for any raw embedding service that can convert
text to a vector under a named model. Results are memoized one level up,
by the EmbeddingService; providers themselves do no caching.

Implementations can include:
- Ollama (local HTTP API)
- sentence-transformers (local)
- OpenAI, Cohere, or any other embedding API
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for raw embedding generation services.

    Providers must tolerate concurrent and redundant calls for the same
    text: two cache lookups that miss at the same time may both ask for it.

    Example:
        ```python
        from fuzzy_cache.protocols import EmbeddingProvider

        provider: EmbeddingProvider = OllamaEmbeddingProvider.create()
        provider: EmbeddingProvider = LocalEmbeddingProvider.create()
        ```
    """

    async def encode(self, text: str, model: str) -> list[float]:
        """Generate an embedding vector for a single text.

        Args:
            text: The text to encode
            model: Name of the embedding model to use

        Returns:
            The embedding vector as a list of floats

        Raises:
            Exception: Any failure; callers decide how to contain it
        """
        ...
