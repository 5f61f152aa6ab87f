"""Service layer for business logic.

This layer contains the core orchestration: memoized embeddings and
the fuzzy caching wrappers. Services depend on protocols (interfaces),
not concrete implementations, making them testable and flexible.

Architecture:
    FuzzyCacheService -> EntryStore        (entries)
                      -> matching          (scoring)
                      -> EmbeddingService  -> EmbeddingProvider (vectors)

Usage:
    ```python
    from fuzzy_cache.services import FuzzyCacheService

    # Using factory method (recommended)
    cache = FuzzyCacheService.create(provider)

    # Or manual creation
    cache = FuzzyCacheService(store=store, embeddings=EmbeddingService(provider))
    ```
"""

from .cache_service import FuzzyCacheService
from .embedding_service import EmbeddingService

__all__ = [
    "EmbeddingService",
    "FuzzyCacheService",
]
