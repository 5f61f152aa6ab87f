"""Ollama-based embedding provider.

Uses Ollama's local API to generate embeddings. Ollama serves models locally
without requiring HuggingFace authentication or downloading models manually.

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull nomic-embed-text`
    - Ollama running: `ollama serve` (usually runs automatically)

The model is chosen per call, so one provider serves every
CosineSimilarity rule regardless of which model the rule names.
"""

import httpx
import structlog

from fuzzy_cache.config import settings
from fuzzy_cache.errors import EmbeddingProviderError

log = structlog.get_logger(__name__)


class OllamaEmbeddingProvider:
    """Ollama-based implementation of EmbeddingProvider protocol.

    This class satisfies the EmbeddingProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = OllamaEmbeddingProvider.create(base_url="http://localhost:11434")

        embedding = await provider.encode("Hello, world!", "nomic-embed-text")
        print(len(embedding))  # 768
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama embedding provider.

        Args:
            base_url: Ollama API base URL.
                     Defaults to settings.ollama_base_url.
            timeout: Request timeout in seconds. Defaults to settings.ollama_timeout.
            client: Pre-built HTTP client (e.g. with a mock transport).
        """
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._timeout = timeout or settings.ollama_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "OllamaEmbeddingProvider":
        """Factory method to create OllamaEmbeddingProvider with defaults.

        Args:
            base_url: Ollama API URL. If None, uses settings.
            timeout: Request timeout in seconds. If None, uses settings.

        Returns:
            Configured OllamaEmbeddingProvider
        """
        return cls(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def encode(self, text: str, model: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode
            model: Ollama model name (e.g. "nomic-embed-text")

        Returns:
            The embedding vector as a list of floats

        Raises:
            EmbeddingProviderError: If the Ollama request fails or the
                response has no embedding in it
        """
        url = f"{self._base_url}/api/embed"
        payload = {
            "model": model,
            "input": text,
        }

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if "connection refused" in str(e).lower():
                error_msg += "\n  → Is Ollama running? Try: ollama serve"
            elif isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 404:
                error_msg += f"\n  → Model not found. Try: ollama pull {model}"
            log.warning("embedding.provider_error", provider="ollama", model=model, error=str(e))
            raise EmbeddingProviderError(error_msg) from e

        # Ollama returns {"embeddings": [[...]]} for single input
        if data.get("embeddings"):
            return [float(x) for x in data["embeddings"][0]]

        # Older servers answer /api/embeddings style: {"embedding": [...]}
        if "embedding" in data:
            return [float(x) for x in data["embedding"]]

        raise EmbeddingProviderError(f"Unexpected response format: {data}")

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
