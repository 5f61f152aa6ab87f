"""Data Transfer Objects for configuration contracts.

These Pydantic models define what calling code hands to the cache.
They are validated when constructed, so bad configurations fail early.

Internal domain logic should use entities from the entities package.
"""

from .caching_config import CachingConfig
from .fuzzy_specs import CosineSimilarity, ExactURL, FuzzyFieldSpec, FuzzyParamsSpec, MoreIsBetter

__all__ = [
    "CachingConfig",
    "CosineSimilarity",
    "ExactURL",
    "FuzzyFieldSpec",
    "FuzzyParamsSpec",
    "MoreIsBetter",
]
