"""Caching configuration contract."""

import types
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fuzzy_cache.config import settings

from .fuzzy_specs import CosineSimilarity, ExactURL, FuzzyParamsSpec, MoreIsBetter


def _unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None`` / ``Optional[X]``, else the annotation itself."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_class(annotation: Any) -> bool:
    # list[str] and friends pass isinstance(..., type) on 3.10
    return isinstance(annotation, type) and get_origin(annotation) is None


def _is_string_type(annotation: Any) -> bool:
    return _is_class(annotation) and issubclass(annotation, str)


def _is_numeric_type(annotation: Any) -> bool:
    return (
        _is_class(annotation)
        and issubclass(annotation, (int, float))
        and not issubclass(annotation, bool)
    )


class CachingConfig(BaseModel):
    """Configuration for wrapping a function with fuzzy caching.

    When ``params_model`` is given, every fuzzy spec is checked against the
    annotated type of its field when the config is built, so a URL rule can
    never end up comparing numbers at lookup time.

    ``ttl_millis`` is deliberately not range-checked here. A non-positive
    value produces a wrapper that raises ``CacheConfigError`` on every call.

    Example:
        ```python
        config = CachingConfig(
            cache_name="summaries",
            fuzzy_params={
                "url": ExactURL(exclude_hash=True),
                "level": MoreIsBetter(),
            },
            ttl_millis=60 * 60 * 1000,
            params_model=SummaryParams,
        )
        ```
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cache_name: str = Field(..., alias="cacheName", description="Unique name of the cache", min_length=1)
    fuzzy_params: FuzzyParamsSpec = Field(
        default_factory=dict,
        alias="fuzzyParams",
        description="Per-field fuzzy matching rules; unlisted fields match exactly",
    )
    ttl_millis: int | None = Field(
        None,
        alias="ttlMillis",
        description="Maximum entry age in milliseconds (defaults to settings)",
    )
    params_model: type[BaseModel] | None = Field(
        None,
        description="Pydantic model describing the params, used to type-check fuzzy specs",
    )

    @model_validator(mode="after")
    def _check_field_types(self) -> "CachingConfig":
        if self.params_model is None:
            return self

        fields = self.params_model.model_fields
        for name, spec in self.fuzzy_params.items():
            if spec is None:
                continue
            if name not in fields:
                raise ValueError(
                    f"fuzzy spec for unknown field {name!r} of {self.params_model.__name__}"
                )

            annotation = fields[name].annotation
            if isinstance(spec, (ExactURL, CosineSimilarity)) and not _is_string_type(_unwrap_optional(annotation)):
                raise ValueError(f"{spec.type} can only be applied to string fields, {name!r} is {annotation!r}")
            # None has no ordering, so Optional numbers are not accepted here
            if isinstance(spec, MoreIsBetter) and not _is_numeric_type(annotation):
                raise ValueError(f"MoreIsBetter can only be applied to numeric fields, {name!r} is {annotation!r}")

        return self

    @property
    def has_valid_ttl(self) -> bool:
        return self.ttl_millis is None or self.ttl_millis > 0

    @property
    def effective_ttl_millis(self) -> int:
        """The configured TTL, or the settings default (24h) when unset."""
        if self.ttl_millis is None:
            return settings.default_ttl_millis
        return self.ttl_millis
