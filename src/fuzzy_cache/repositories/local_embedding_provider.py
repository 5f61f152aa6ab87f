"""Local sentence-transformers embedding provider.

Runs sentence-transformers models in-process. No API calls required.
Models are loaded lazily, one per model name, the first time a rule asks
for them.
"""

import asyncio
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np
import structlog

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

log = structlog.get_logger(__name__)


class LocalEmbeddingProvider:
    """Local sentence-transformers implementation of EmbeddingProvider.

    This class satisfies the EmbeddingProvider protocol through structural
    typing - no explicit inheritance needed.

    Encoding is CPU-bound, so it runs in a worker thread to keep the
    event loop responsive.
    """

    def __init__(self, model_factory: Callable[[str], Any] | None = None) -> None:
        """Initialize the local embedding provider with no models loaded.

        Args:
            model_factory: Builds a model from its name.
                           Defaults to sentence_transformers.SentenceTransformer.
        """
        self._model_factory = model_factory
        self._models: dict[str, "SentenceTransformer"] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls, model_factory: Callable[[str], Any] | None = None) -> "LocalEmbeddingProvider":
        """Factory method to create LocalEmbeddingProvider with defaults.

        Args:
            model_factory: Model builder. If None, uses SentenceTransformer.

        Returns:
            Configured LocalEmbeddingProvider
        """
        return cls(model_factory=model_factory)

    def get_model(self, model_name: str) -> "SentenceTransformer":
        """Lazy-load the embedding model for ``model_name``."""
        with self._lock:
            model = self._models.get(model_name)
            if model is None:
                log.info("embedding.model_loading", model=model_name)
                start_time = time.time()
                model = self._load(model_name)
                self._models[model_name] = model
                log.info("embedding.model_loaded", model=model_name, seconds=round(time.time() - start_time, 2))
        return model

    def _load(self, model_name: str) -> "SentenceTransformer":
        if self._model_factory is None:
            # Imported here so the module loads without the "local" extra
            from sentence_transformers import SentenceTransformer

            self._model_factory = SentenceTransformer
        return self._model_factory(model_name)

    def _encode_sync(self, text: str, model_name: str) -> list[float]:
        embedding = self.get_model(model_name).encode(
            text,
            show_progress_bar=False,
            normalize_embeddings=True,
        )
        # Handle both single string (returns array) and list input
        if isinstance(embedding, np.ndarray):
            if embedding.ndim == 1:
                return embedding.tolist()
            return embedding[0].tolist()
        return list(embedding)

    async def encode(self, text: str, model: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode
            model: sentence-transformers model name

        Returns:
            The embedding vector as a list of floats
        """
        return await asyncio.to_thread(self._encode_sync, text, model)

    @property
    def loaded_models(self) -> list[str]:
        """Names of the models loaded so far."""
        with self._lock:
            return list(self._models)
