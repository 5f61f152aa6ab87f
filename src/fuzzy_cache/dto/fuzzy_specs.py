"""Fuzzy field specifications.

Each spec says how one parameter field may be matched approximately
instead of by exact equality. Specs are discriminated on ``type`` so plain
dicts validate into the right model:

    ```python
    {"type": "ExactURL", "excludeHash": True}
    {"type": "CosineSimilarity", "threshold": 0.8, "model": "nomic-embed-text"}
    {"type": "MoreIsBetter"}
    ```
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ExactURL(BaseModel):
    """Compare URL strings after normalization.

    Only applicable to string fields.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["ExactURL"] = "ExactURL"
    exclude_hash: bool = Field(
        False,
        alias="excludeHash",
        description="Ignore the #fragment when comparing",
    )


class MoreIsBetter(BaseModel):
    """A stored value satisfies a request when stored >= requested.

    Only applicable to numeric fields.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["MoreIsBetter"] = "MoreIsBetter"


class CosineSimilarity(BaseModel):
    """Compare strings by cosine similarity of their embeddings.

    Only applicable to string fields.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["CosineSimilarity"] = "CosineSimilarity"
    threshold: float = Field(
        ...,
        description="Minimum similarity for a candidate to be usable (-1 to 1)",
        ge=-1.0,
        le=1.0,
    )
    model: str = Field(..., description="Embedding model name", min_length=1)


FuzzyFieldSpec = Annotated[
    Union[ExactURL, MoreIsBetter, CosineSimilarity],
    Field(discriminator="type"),
]

# Field name -> spec. A missing key or None means exact equality.
FuzzyParamsSpec = dict[str, Union[FuzzyFieldSpec, None]]
