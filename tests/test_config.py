"""
Tests for configuration contracts and settings.
"""

from enum import IntEnum
from typing import Optional

import pytest
from pydantic import BaseModel, ValidationError

from fuzzy_cache.config import DEFAULT_TTL_MILLIS, Settings, settings
from fuzzy_cache.dto import CachingConfig, CosineSimilarity, ExactURL, MoreIsBetter


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Params(BaseModel):
    url: str
    prompt: str
    level: int
    weight: float
    tier: Level
    note: Optional[str] = None
    flag: bool = False
    tags: list[str] = []
    maybe_level: Optional[int] = None
    maybe_weight: float | None = None


class TestFuzzySpecs:
    def test_dict_specs_validate_by_type(self):
        config = CachingConfig(
            cache_name="c",
            fuzzy_params={
                "url": {"type": "ExactURL", "excludeHash": True},
                "prompt": {"type": "CosineSimilarity", "threshold": 0.8, "model": "m"},
                "level": {"type": "MoreIsBetter"},
                "other": None,
            },
        )

        assert config.fuzzy_params["url"] == ExactURL(exclude_hash=True)
        assert config.fuzzy_params["prompt"] == CosineSimilarity(threshold=0.8, model="m")
        assert isinstance(config.fuzzy_params["level"], MoreIsBetter)
        assert config.fuzzy_params["other"] is None

    def test_exclude_hash_defaults_to_false(self):
        assert ExactURL().exclude_hash is False

    def test_unknown_spec_type_rejected(self):
        with pytest.raises(ValidationError):
            CachingConfig(cache_name="c", fuzzy_params={"x": {"type": "Regex"}})

    @pytest.mark.parametrize("threshold", [1.5, -1.01])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ValidationError):
            CosineSimilarity(threshold=threshold, model="m")

    def test_model_required(self):
        with pytest.raises(ValidationError):
            CosineSimilarity(threshold=0.5, model="")

    def test_specs_are_frozen(self):
        spec = ExactURL(exclude_hash=True)
        with pytest.raises(ValidationError):
            spec.exclude_hash = False


class TestCachingConfig:
    def test_camel_case_aliases(self):
        config = CachingConfig.model_validate({"cacheName": "c", "ttlMillis": 5})
        assert config.cache_name == "c"
        assert config.ttl_millis == 5

    def test_cache_name_required(self):
        with pytest.raises(ValidationError):
            CachingConfig(cache_name="")

    def test_default_ttl(self):
        config = CachingConfig(cache_name="c")
        assert config.ttl_millis is None
        assert config.has_valid_ttl
        assert config.effective_ttl_millis == settings.default_ttl_millis

    @pytest.mark.parametrize("ttl", [0, -10])
    def test_non_positive_ttl_accepted_but_flagged(self, ttl):
        config = CachingConfig(cache_name="c", ttl_millis=ttl)
        assert not config.has_valid_ttl

    def test_matching_field_types_accepted(self):
        config = CachingConfig(
            cache_name="c",
            fuzzy_params={
                "url": ExactURL(exclude_hash=True),
                "prompt": CosineSimilarity(threshold=0.5, model="m"),
                "note": CosineSimilarity(threshold=0.5, model="m"),
                "level": MoreIsBetter(),
                "weight": MoreIsBetter(),
                "tier": MoreIsBetter(),
                "tags": None,
            },
            params_model=Params,
        )
        assert config.params_model is Params

    @pytest.mark.parametrize(
        "field, spec",
        [
            ("level", ExactURL()),
            ("tier", CosineSimilarity(threshold=0.5, model="m")),
            ("tags", CosineSimilarity(threshold=0.5, model="m")),
            ("url", MoreIsBetter()),
            ("flag", MoreIsBetter()),
            ("maybe_level", MoreIsBetter()),
            ("maybe_weight", MoreIsBetter()),
        ],
    )
    def test_mismatched_field_types_rejected(self, field, spec):
        with pytest.raises(ValidationError, match="can only be applied"):
            CachingConfig(cache_name="c", fuzzy_params={field: spec}, params_model=Params)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="unknown field"):
            CachingConfig(cache_name="c", fuzzy_params={"missing": MoreIsBetter()}, params_model=Params)

    def test_without_params_model_types_are_not_checked(self):
        config = CachingConfig(cache_name="c", fuzzy_params={"anything": MoreIsBetter()})
        assert config.params_model is None


class TestSettings:
    def test_defaults(self):
        assert DEFAULT_TTL_MILLIS == 86_400_000
        assert settings.default_ttl_millis > 0
        assert settings.ollama_base_url

    def test_rejects_non_positive_default_ttl(self):
        with pytest.raises(ValueError, match="FUZZY_CACHE_DEFAULT_TTL_MILLIS"):
            Settings(default_ttl_millis=0)

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="FUZZY_CACHE_LOG_LEVEL"):
            Settings(log_level="LOUD")
