"""Repository layer for data access.

This layer holds concrete implementations behind the protocol-based
interfaces: the entry store and the raw embedding providers. This enables:
- Easy swapping of implementations (Ollama -> local models, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from fuzzy_cache.protocols import EmbeddingProvider, EntryStore

from .local_embedding_provider import LocalEmbeddingProvider
from .memory_store import InMemoryEntryStore
from .ollama_embedding_provider import OllamaEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "EntryStore",
    "InMemoryEntryStore",
    "LocalEmbeddingProvider",
    "OllamaEmbeddingProvider",
]
