"""
Tests for the in-memory entry store.
"""

from concurrent.futures import ThreadPoolExecutor

from fuzzy_cache.entities import CacheEntry, Failure, Success
from fuzzy_cache.protocols import EntryStore
from fuzzy_cache.repositories import InMemoryEntryStore


def entry(value, created_at=1.0, **params):
    return CacheEntry(params=params, outcome=Success(value), created_at=created_at)


def test_satisfies_protocol(store):
    assert isinstance(store, EntryStore)


def test_store_and_retrieve(store):
    e = entry("v", x=1)
    store.put("cache", e)

    assert store.get_all("cache") == (e,)


def test_unknown_cache_is_empty(store):
    assert store.get_all("nope") == ()


def test_caches_are_isolated(store):
    a, b = entry("a"), entry("b")
    store.put("one", a)
    store.put("two", b)

    assert store.get_all("one") == (a,)
    assert store.get_all("two") == (b,)


def test_insertion_order_and_duplicates_kept(store):
    entries = [entry(i, x=1) for i in range(3)]
    for e in entries:
        store.put("cache", e)

    assert store.get_all("cache") == tuple(entries)


def test_failure_entries(store):
    error = ValueError("boom")
    e = CacheEntry(params={"x": 1}, outcome=Failure(error), created_at=1.0)
    store.put("cache", e)

    (stored,) = store.get_all("cache")
    assert not stored.outcome.is_success
    assert stored.outcome.error is error


def test_snapshot_not_affected_by_later_puts(store):
    store.put("cache", entry("first"))
    snapshot = store.get_all("cache")
    store.put("cache", entry("second"))

    assert len(snapshot) == 1
    assert len(store.get_all("cache")) == 2


def test_concurrent_puts_lose_nothing(store):
    def writer(worker):
        for i in range(200):
            store.put("shared", entry((worker, i)))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(writer, range(8)))

    stored = store.get_all("shared")
    assert len(stored) == 1600
    assert len({e.outcome.value for e in stored}) == 1600


def test_stats_and_clear():
    store = InMemoryEntryStore.create()
    store.put("a", entry(1))
    store.put("a", entry(2))
    store.put("b", entry(3))

    assert store.count_all() == 3
    assert sorted(store.cache_names()) == ["a", "b"]
    assert store.get_stats() == {"backend": "memory", "total_entries": 3, "caches": {"a": 2, "b": 1}}

    assert store.clear_all() == 3
    assert store.count_all() == 0
    assert store.get_all("a") == ()
