# tests/test_query_cache.py
import threading

import pytest

from app.core.query_cache import QueryCache


def test_second_read_is_served_from_cache():
    cache = QueryCache(ttl_seconds=60)
    calls = []

    def fetch():
        calls.append(1)
        return ["a"]

    assert cache.get_or_fetch(("products",), fetch) == ["a"]
    assert cache.get_or_fetch(("products",), fetch) == ["a"]
    assert len(calls) == 1


def test_invalidate_by_prefix():
    cache = QueryCache(ttl_seconds=60)
    cache.get_or_fetch(("product", 1), lambda: "one")
    cache.get_or_fetch(("product", 2), lambda: "two")
    cache.get_or_fetch(("products",), lambda: "all")

    cache.invalidate("product")

    assert cache.get_or_fetch(("product", 1), lambda: "one*") == "one*"
    assert cache.get_or_fetch(("product", 2), lambda: "two*") == "two*"
    assert cache.get_or_fetch(("products",), lambda: "all*") == "all"


def test_failed_fetch_is_not_cached():
    cache = QueryCache(ttl_seconds=60)

    def boom():
        raise RuntimeError("db down")

    with pytest.raises(RuntimeError):
        cache.get_or_fetch(("orders",), boom)
    assert cache.get_or_fetch(("orders",), lambda: "ok") == "ok"


def test_concurrent_reads_share_one_fetch():
    cache = QueryCache(ttl_seconds=60)
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_fetch():
        calls.append(1)
        started.set()
        release.wait(5)
        return "rows"

    results = []

    def reader():
        results.append(cache.get_or_fetch(("customers",), slow_fetch))

    leader = threading.Thread(target=reader)
    leader.start()
    assert started.wait(5)

    followers = [threading.Thread(target=reader) for _ in range(4)]
    for t in followers:
        t.start()
    release.set()
    for t in [leader, *followers]:
        t.join(5)

    assert results == ["rows"] * 5
    assert len(calls) == 1


def test_followers_see_the_leaders_error():
    cache = QueryCache()
    started = threading.Event()
    release = threading.Event()
    errors = []

    def failing_fetch():
        started.set()
        release.wait(5)
        raise ValueError("bad query")

    def reader():
        try:
            cache.get_or_fetch(("orders",), failing_fetch)
        except ValueError as exc:
            errors.append(str(exc))

    leader = threading.Thread(target=reader)
    leader.start()
    assert started.wait(5)
    follower = threading.Thread(target=reader)
    follower.start()
    release.set()
    leader.join(5)
    follower.join(5)

    assert errors == ["bad query", "bad query"]


def test_result_of_fetch_invalidated_midway_is_not_stored():
    cache = QueryCache(ttl_seconds=60)

    def fetch_then_mutate():
        cache.invalidate("products")
        return "stale"

    assert cache.get_or_fetch(("products",), fetch_then_mutate) == "stale"
    assert cache.get_or_fetch(("products",), lambda: "fresh") == "fresh"


def test_value_is_refetched_after_ttl():
    now = [100.0]
    cache = QueryCache(ttl_seconds=30, clock=lambda: now[0])

    assert cache.get_or_fetch(("customers",), lambda: "v1") == "v1"
    now[0] += 29
    assert cache.get_or_fetch(("customers",), lambda: "v2") == "v1"
    now[0] += 1
    assert cache.get_or_fetch(("customers",), lambda: "v2") == "v2"


def test_zero_ttl_stores_nothing():
    cache = QueryCache(ttl_seconds=0)
    calls = []

    def fetch():
        calls.append(1)
        return len(calls)

    assert cache.get_or_fetch(("orders",), fetch) == 1
    assert cache.get_or_fetch(("orders",), fetch) == 2
