"""
Shared fixtures: fake embedding provider and a controllable clock.
"""

import pytest

from fuzzy_cache.repositories import InMemoryEntryStore
from fuzzy_cache.services import EmbeddingService, FuzzyCacheService

BASE_VECTORS = {
    "same": [1.0, 0.0],
    "similar": [0.9, 0.1],
    "different": [0.0, 1.0],
    "eighty": [0.8, 0.6],
}


class FakeEmbeddingProvider:
    """Dict-backed provider that records every call.

    Unknown texts embed to [len(text), 0], so any two unknown texts have
    similarity 1.
    """

    def __init__(self, vectors=None, failing=()):
        self.vectors = {**BASE_VECTORS, **(vectors or {})}
        self.failing = set(failing)
        self.calls = []

    async def encode(self, text, model):
        self.calls.append((text, model))
        if text in self.failing:
            raise RuntimeError(f"cannot embed {text!r}")
        return list(self.vectors.get(text, [float(len(text)), 0.0]))


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now=1_700_000_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, millis):
        self.now += millis


@pytest.fixture
def provider():
    return FakeEmbeddingProvider(failing={"bad"})


@pytest.fixture
def embeddings(provider):
    return EmbeddingService(provider)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryEntryStore()


@pytest.fixture
def cache(store, embeddings, clock):
    return FuzzyCacheService(store=store, embeddings=embeddings, clock=clock)
