"""Example cached computations.

Two stand-ins for LLM-backed calls, each with the cache configuration it
would be wrapped with in an application:

    ```python
    cache = FuzzyCacheService.create(OllamaEmbeddingProvider.create())
    summarize = cache.with_caching(summarize_website, summarize_website_cache_config)
    ```
"""

from enum import IntEnum

from pydantic import BaseModel, Field

from fuzzy_cache.config import settings
from fuzzy_cache.dto import CachingConfig, CosineSimilarity, ExactURL, MoreIsBetter


class ReasoningLevel(IntEnum):
    """Reasoning effort. With MoreIsBetter, higher levels stand in for lower ones."""

    MINIMAL = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class SummarizeWebsiteParams(BaseModel):
    """Parameters for summarize_website."""

    url: str = Field(..., description="Page to summarize")
    prompt: str = Field(..., description="What the summary should focus on")
    reasoning_level: ReasoningLevel = ReasoningLevel.LOW


class PredictUserInterestsParams(BaseModel):
    """Parameters for predict_user_interests."""

    user_profile_bio: str
    user_email_domain: str
    list_of_potential_interests: list[str] = Field(default_factory=list)
    reasoning_level: ReasoningLevel = ReasoningLevel.LOW


async def summarize_website(params: SummarizeWebsiteParams) -> str:
    """Summarize a website (an LLM call in a real application)."""
    return (
        f"Summarized content from {params.url} with prompt {params.prompt!r} "
        f"at reasoning level {params.reasoning_level.name.lower()}"
    )


async def predict_user_interests(params: PredictUserInterestsParams) -> str:
    """Predict user interests (an ML/LLM call in a real application)."""
    return (
        f"Predicted interests for user from {params.user_email_domain} "
        f"with {len(params.list_of_potential_interests)} potential interests"
    )


# Same page with a different #fragment, a paraphrased prompt, or a request for
# less reasoning than a stored result all reuse that result.
summarize_website_cache_config = CachingConfig(
    cache_name="summarizeWebsiteCache",
    fuzzy_params={
        "url": ExactURL(exclude_hash=True),
        "prompt": CosineSimilarity(threshold=0.1, model=settings.embedding_model),
        "reasoning_level": MoreIsBetter(),
    },
    params_model=SummarizeWebsiteParams,
)

# Email domain and the interest list must match exactly.
predict_user_interests_cache_config = CachingConfig(
    cache_name="predictUserInterestsCache",
    fuzzy_params={
        "user_profile_bio": CosineSimilarity(threshold=0.1, model=settings.embedding_model),
        "reasoning_level": MoreIsBetter(),
    },
    params_model=PredictUserInterestsParams,
)
