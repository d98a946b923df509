"""Tests for the result cache"""
import threading
from datetime import datetime, timezone

import pytest

from popaloon.core.cache import MISS, ResultCache, cache_key
from popaloon.services.ranges import UNBOUNDED, DateRange


def test_set_then_get_returns_value(cache):
    cache.set(cache_key("leaderboard", 10, 0), ["a", "b"], 60)
    assert cache.get(cache_key("leaderboard", 10, 0)) == ["a", "b"]


def test_unknown_key_is_miss(cache):
    assert cache.get(("nothing",)) is MISS


@pytest.mark.parametrize("value", [0, None, [], "", False])
def test_zero_like_values_are_hits(cache, value):
    cache.set(("rank", "u"), value, 60)
    assert cache.get(("rank", "u")) is not MISS
    assert cache.get(("rank", "u")) == value


def test_entries_expire_after_ttl(cache, clock):
    cache.set(("score", "u"), 42, 60)
    clock.advance(59)
    assert cache.get(("score", "u")) == 42
    clock.advance(2)
    assert cache.get(("score", "u")) is MISS


def test_entries_keep_their_own_ttl(cache, clock):
    cache.set(("balloon-name", "default"), "catalog", 3600)
    cache.set(("leaderboard", 10, 0), "page", 60)
    clock.advance(120)
    assert cache.get(("leaderboard", 10, 0)) is MISS
    assert cache.get(("balloon-name", "default")) == "catalog"


def test_non_positive_ttl_stores_nothing(cache):
    cache.set(("k",), 1, 0)
    assert cache.get(("k",)) is MISS


def test_get_or_compute_only_computes_on_miss(cache):
    calls = []

    def compute():
        calls.append(1)
        return 0

    assert cache.get_or_compute(("total",), 60, compute) == 0
    assert cache.get_or_compute(("total",), 60, compute) == 0
    assert len(calls) == 1


def test_compute_errors_propagate_and_are_not_cached(cache):
    def boom():
        raise RuntimeError("store down")

    with pytest.raises(RuntimeError):
        cache.get_or_compute(("total",), 60, boom)
    assert cache.get(("total",)) is MISS


def test_broken_store_degrades_to_recompute(cache):
    class BrokenStore:
        def get(self, key, default=None):
            raise RuntimeError("cache unavailable")

        def __setitem__(self, key, value):
            raise RuntimeError("cache unavailable")

    cache._store = BrokenStore()

    assert cache.get(("k",)) is MISS
    cache.set(("k",), 1, 60)
    assert cache.get_or_compute(("k",), 60, lambda: 7) == 7


def test_capacity_is_bounded(clock):
    small = ResultCache(maxsize=2, timer=clock)
    for i in range(5):
        small.set(("k", i), i, 60)
    assert len(small) <= 2


def test_date_ranges_produce_distinct_keys():
    start = datetime(2024, 8, 1, tzinfo=timezone.utc)
    end = datetime(2024, 9, 1, tzinfo=timezone.utc)

    keys = {
        cache_key("leaderboard", 10, 0, *UNBOUNDED.cache_token()),
        cache_key("leaderboard", 10, 0, *DateRange(start).cache_token()),
        cache_key("leaderboard", 10, 0, *DateRange(None, end).cache_token()),
        cache_key("leaderboard", 10, 0, *DateRange(start, end).cache_token()),
        cache_key("leaderboard", 10, 10, *UNBOUNDED.cache_token()),
        cache_key("leaderboard", 20, 0, *UNBOUNDED.cache_token()),
    }
    assert len(keys) == 6


def test_same_query_builds_same_key():
    naive = DateRange(datetime(2024, 8, 1))
    aware = DateRange(datetime(2024, 8, 1, tzinfo=timezone.utc))
    assert cache_key("rank", "u", *naive.cache_token()) == cache_key(
        "rank", "u", *aware.cache_token()
    )


def test_windows_inside_one_second_share_a_key():
    first = DateRange(datetime(2024, 8, 1, 12, 0, 0, 100000, tzinfo=timezone.utc))
    second = DateRange(datetime(2024, 8, 1, 12, 0, 0, 900000, tzinfo=timezone.utc))
    assert first.cache_token() == second.cache_token()


def test_populations_weigh_one_per_row(clock):
    small = ResultCache(maxsize=4, timer=clock)
    small.set(("ranking", "a"), (1, 2, 3), 60)
    small.set(("ranking", "b"), (4, 5, 6), 60)

    assert small.get(("ranking", "a")) is MISS
    assert small.get(("ranking", "b")) == (4, 5, 6)


def test_value_larger_than_cache_is_not_stored(clock):
    small = ResultCache(maxsize=2, timer=clock)
    small.set(("score",), 1, 60)
    small.set(("ranking",), (1, 2, 3), 60)

    assert small.get(("ranking",)) is MISS
    assert small.get(("score",)) == 1


def test_concurrent_writers_and_readers(clock):
    shared = ResultCache(maxsize=1000, timer=clock)
    errors = []

    def worker(n):
        try:
            for i in range(50):
                shared.set(("k", n, i), n * i, 60)
                assert shared.get(("k", n, i)) == n * i
        except Exception as exc:  # noqa: BLE001 - collected for the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(shared) == 8 * 50
    assert all(shared.get(("k", n, i)) == n * i for n in range(8) for i in range(50))
