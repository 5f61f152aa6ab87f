"""
Tests for the bundled example computations and their cache configurations.
"""

import pytest
from pydantic import ValidationError

from fuzzy_cache.dto import CachingConfig, ExactURL
from fuzzy_cache.entities import CacheHitKind
from fuzzy_cache.examples import (
    PredictUserInterestsParams,
    ReasoningLevel,
    SummarizeWebsiteParams,
    predict_user_interests,
    predict_user_interests_cache_config,
    summarize_website,
    summarize_website_cache_config,
)


@pytest.mark.asyncio
async def test_summarize_website_output():
    result = await summarize_website(
        SummarizeWebsiteParams(url="https://example.com", prompt="focus", reasoning_level=ReasoningLevel.HIGH)
    )
    assert result == "Summarized content from https://example.com with prompt 'focus' at reasoning level high"


@pytest.mark.asyncio
async def test_predict_user_interests_output():
    result = await predict_user_interests(
        PredictUserInterestsParams(
            user_profile_bio="hiker",
            user_email_domain="example.org",
            list_of_potential_interests=["a", "b"],
        )
    )
    assert result == "Predicted interests for user from example.org with 2 potential interests"


def test_configs_are_typed_against_their_params():
    assert summarize_website_cache_config.params_model is SummarizeWebsiteParams
    assert predict_user_interests_cache_config.params_model is PredictUserInterestsParams
    assert summarize_website_cache_config.fuzzy_params["url"].exclude_hash


def test_url_rule_on_reasoning_level_rejected():
    with pytest.raises(ValidationError):
        CachingConfig(
            cache_name="broken",
            fuzzy_params={"reasoning_level": ExactURL()},
            params_model=SummarizeWebsiteParams,
        )


class TestSummarizeFlow:
    @pytest.mark.asyncio
    async def test_other_fragment_and_lower_level_reuses_result(self, cache):
        summarize = cache.with_caching_meta(summarize_website, summarize_website_cache_config)

        first = await summarize(
            SummarizeWebsiteParams(
                url="https://Example.com/page#intro",
                prompt="same",
                reasoning_level=ReasoningLevel.HIGH,
            )
        )
        second = await summarize(
            SummarizeWebsiteParams(
                url="https://example.com/page#details",
                prompt="same",
                reasoning_level=ReasoningLevel.LOW,
            )
        )

        assert first.cache.kind == CacheHitKind.MISS
        assert second.cache.kind == CacheHitKind.FUZZY
        assert second.cache.score == pytest.approx(3.0)
        assert second.value == first.value
        assert second.value.endswith("reasoning level high")

    @pytest.mark.asyncio
    async def test_higher_level_is_not_served_by_lower(self, cache):
        summarize = cache.with_caching_meta(summarize_website, summarize_website_cache_config)
        params = {"url": "https://example.com", "prompt": "same"}

        await summarize(SummarizeWebsiteParams(**params, reasoning_level=ReasoningLevel.LOW))
        result = await summarize(SummarizeWebsiteParams(**params, reasoning_level=ReasoningLevel.HIGH))

        assert result.cache.kind == CacheHitKind.MISS
        assert result.value.endswith("reasoning level high")

    @pytest.mark.asyncio
    async def test_different_domain_misses(self, cache):
        summarize = cache.with_caching_meta(summarize_website, summarize_website_cache_config)

        await summarize(SummarizeWebsiteParams(url="https://example.com/page", prompt="same"))
        result = await summarize(SummarizeWebsiteParams(url="https://example.org/page", prompt="same"))

        assert result.cache.kind == CacheHitKind.MISS
        assert cache.store.count_all() == 2


class TestPredictFlow:
    @pytest.mark.asyncio
    async def test_similar_bio_hits(self, cache):
        predict = cache.with_caching_meta(predict_user_interests, predict_user_interests_cache_config)
        base = {"user_email_domain": "example.org", "list_of_potential_interests": ["hiking"]}

        await predict(PredictUserInterestsParams(user_profile_bio="same", **base))
        result = await predict(PredictUserInterestsParams(user_profile_bio="similar", **base))

        assert result.cache.kind == CacheHitKind.FUZZY
        assert result.value == "Predicted interests for user from example.org with 1 potential interests"

    @pytest.mark.asyncio
    async def test_interest_list_must_match_exactly(self, cache):
        predict = cache.with_caching_meta(predict_user_interests, predict_user_interests_cache_config)

        await predict(
            PredictUserInterestsParams(
                user_profile_bio="same", user_email_domain="example.org", list_of_potential_interests=["a"]
            )
        )
        result = await predict(
            PredictUserInterestsParams(
                user_profile_bio="same", user_email_domain="example.org", list_of_potential_interests=["a", "b"]
            )
        )

        assert result.cache.kind == CacheHitKind.MISS
