"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any

from .outcome import Outcome


@dataclass(frozen=True)
class CacheEntry:
    """Domain entity for one cached computation.

    Entries are append-only: once stored they are never edited. Identity is
    the entry's position in its cache's sequence.

    Attributes:
        params: The parameter set the computation ran with
        outcome: Success or failure captured from the computation
        created_at: When the computation ran (epoch milliseconds)
    """

    params: dict[str, Any]
    outcome: Outcome
    created_at: float
