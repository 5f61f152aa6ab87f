import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEFAULT_TTL_MILLIS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    default_ttl_millis: int = int(os.getenv("FUZZY_CACHE_DEFAULT_TTL_MILLIS", str(DEFAULT_TTL_MILLIS)))

    # Embedding
    embedding_model: str = os.getenv("FUZZY_CACHE_EMBEDDING_MODEL", "nomic-embed-text")

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_timeout: float = float(os.getenv("OLLAMA_TIMEOUT", "30"))

    # Logging
    log_level: str = os.getenv("FUZZY_CACHE_LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("FUZZY_CACHE_LOG_JSON", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.default_ttl_millis <= 0:
            raise ValueError("FUZZY_CACHE_DEFAULT_TTL_MILLIS must be positive")

        if self.ollama_timeout <= 0:
            raise ValueError("OLLAMA_TIMEOUT must be positive")

        if self.log_level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"FUZZY_CACHE_LOG_LEVEL is not a valid level, got {self.log_level}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
