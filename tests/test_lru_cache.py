"""Tests for the bounded LRU cache."""

from fitplan.services.cache import Cache, LruCache


def test_count_limit_evicts_least_recently_used() -> None:
    cache = LruCache(count_limit=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")

    cache.set("c", 3)

    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_total_cost_limit_evicts_until_within_bound() -> None:
    cache = LruCache(count_limit=10, total_cost_limit=100)
    cache.set("a", "x", cost=40)
    cache.set("b", "y", cost=40)

    cache.set("c", "z", cost=50)

    assert "a" not in cache
    assert len(cache) == 2
    assert cache.total_cost == 90


def test_entry_larger_than_cost_limit_is_not_stored() -> None:
    cache = LruCache(count_limit=10, total_cost_limit=100)
    cache.set("a", "x", cost=10)

    cache.set("huge", "y", cost=500)

    assert "huge" not in cache
    assert cache.get("a") == "x"


def test_replacing_key_updates_cost() -> None:
    cache = LruCache(total_cost_limit=100)
    cache.set("a", "x", cost=60)

    cache.set("a", "y", cost=30)

    assert cache.get("a") == "y"
    assert cache.total_cost == 30


def test_zero_limits_disable_bounds() -> None:
    cache = LruCache(count_limit=0, total_cost_limit=0)
    for index in range(500):
        cache.set(str(index), index, cost=1_000_000)

    assert len(cache) == 500


def test_remove_and_clear() -> None:
    cache = LruCache()
    cache.set("a", 1, cost=5)
    cache.set("b", 2, cost=5)

    cache.remove("a")
    cache.remove("missing")
    assert cache.get("a") is None
    assert cache.total_cost == 5

    cache.clear()
    assert len(cache) == 0
    assert cache.total_cost == 0


def test_lru_cache_satisfies_cache_interface() -> None:
    cache: Cache = LruCache(count_limit=1)
    cache.set("a", 1, cost=1)
    cache.set("b", 2, cost=1)

    assert len(cache) == 1
    assert cache.get("b") == 2
