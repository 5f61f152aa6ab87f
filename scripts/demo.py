#!/usr/bin/env python3
"""
Demo script for fuzzy cache.

This script demonstrates fuzzy result caching with the two example
computations: URL fragments, paraphrased prompts and reasoning levels.
Requires a running Ollama with the configured embedding model pulled.
"""

import asyncio

from fuzzy_cache import CachingConfig, FuzzyCacheService, MoreIsBetter, configure_logging, settings
from fuzzy_cache.examples import (
    PredictUserInterestsParams,
    ReasoningLevel,
    SummarizeWebsiteParams,
    predict_user_interests,
    predict_user_interests_cache_config,
    summarize_website,
    summarize_website_cache_config,
)
from fuzzy_cache.repositories import OllamaEmbeddingProvider


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_summaries(cache: FuzzyCacheService) -> None:
    """Demonstrate URL, similarity and reasoning-level matching."""
    print_section("Summarize Website")

    summarize = cache.with_caching_meta(summarize_website, summarize_website_cache_config)

    requests = [
        SummarizeWebsiteParams(
            url="https://example.com/pricing#plans",
            prompt="Summarize the pricing tiers",
            reasoning_level=ReasoningLevel.HIGH,
        ),
        # Same page, different fragment, less reasoning needed
        SummarizeWebsiteParams(
            url="https://example.com/pricing#faq",
            prompt="Summarize the pricing tiers",
            reasoning_level=ReasoningLevel.LOW,
        ),
        # Paraphrased prompt
        SummarizeWebsiteParams(
            url="https://example.com/pricing",
            prompt="Give me a summary of the price plans",
            reasoning_level=ReasoningLevel.MEDIUM,
        ),
        # Needs more reasoning than anything cached
        SummarizeWebsiteParams(
            url="https://example.com/about",
            prompt="Summarize the pricing tiers",
            reasoning_level=ReasoningLevel.HIGH,
        ),
    ]

    for params in requests:
        result = await summarize(params)
        print(f"\n  {params.url} [{params.reasoning_level.name}] {params.prompt!r}")
        print(f"    → {result.cache.kind.value:5} (score {result.cache.score:.3f})")
        print(f"    {result.value}")


async def demo_interests(cache: FuzzyCacheService) -> None:
    """Demonstrate exact fields next to a similarity field."""
    print_section("Predict User Interests")

    predict = cache.with_caching_meta(predict_user_interests, predict_user_interests_cache_config)

    bios = [
        ("Backend engineer who loves distributed systems", "example.com"),
        ("Backend developer into distributed systems", "example.com"),
        ("Backend developer into distributed systems", "example.org"),
    ]
    for bio, domain in bios:
        params = PredictUserInterestsParams(
            user_profile_bio=bio,
            user_email_domain=domain,
            list_of_potential_interests=["databases", "hiking", "compilers"],
        )
        result = await predict(params)
        print(f"\n  {bio!r} @ {domain}")
        print(f"    → {result.cache.kind.value:5} (score {result.cache.score:.3f})")


async def demo_failures(cache: FuzzyCacheService) -> None:
    """Demonstrate that failures are cached and replayed."""
    print_section("Cached Failures")

    calls = 0

    async def flaky(params: dict) -> str:
        nonlocal calls
        calls += 1
        raise ValueError(f"upstream rejected level {params['level']}")

    cached_flaky = cache.with_caching(
        flaky,
        CachingConfig(cache_name="flaky", fuzzy_params={"level": MoreIsBetter()}),
    )
    for level in (2, 2, 1):
        try:
            await cached_flaky({"level": level})
        except ValueError as e:
            print(f"  level={level}: {e}")
    print(f"  underlying calls: {calls}")


async def main() -> None:
    configure_logging()

    provider = OllamaEmbeddingProvider.create()
    cache = FuzzyCacheService.create(provider)

    print(f"Embedding model: {settings.embedding_model} via {provider.base_url}")
    try:
        await demo_summaries(cache)
        await demo_interests(cache)
        await demo_failures(cache)
    finally:
        await provider.close()

    print_section("Stats")
    for key, value in cache.get_stats().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    asyncio.run(main())
