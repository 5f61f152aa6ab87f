"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory store, Ollama or local embeddings, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from fuzzy_cache.protocols import EmbeddingProvider, EntryStore

    store: EntryStore = InMemoryEntryStore()
    provider: EmbeddingProvider = OllamaEmbeddingProvider.create()
    ```
"""

from .embedding_provider import EmbeddingProvider
from .entry_store import EntryStore

__all__ = [
    "EmbeddingProvider",
    "EntryStore",
]
