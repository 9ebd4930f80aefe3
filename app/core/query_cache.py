# app/core/query_cache.py
"""
Process-wide query cache for list endpoints.

Keys are tuples, e.g. ("products",) or ("product", "<uuid>").
Services read through `get_or_fetch` and call `invalidate` after every
mutation that touches the underlying rows.

Concurrent callers asking for the same missing key share one fetch: the
first caller runs the fetcher, the others wait for its result (or its
exception). Failed fetches are never cached.

A stored value is served for at most `ttl_seconds`; rows written by other
processes (the storefront, other workers) show up once it expires. With
`ttl_seconds=0` nothing is stored and only in-flight fetches are shared.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Hashable, TypeVar

from app.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

CacheKey = tuple[Hashable, ...]


class _InFlight:
    def __init__(self) -> None:
        self.event = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None


def _has_prefix(key: CacheKey, prefix: CacheKey) -> bool:
    return key[: len(prefix)] == prefix


class QueryCache:
    def __init__(
        self,
        ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (stored_at, value)
        self._values: dict[CacheKey, tuple[float, Any]] = {}
        self._inflight: dict[CacheKey, _InFlight] = {}

    def get_or_fetch(self, key: CacheKey, fetcher: Callable[[], T]) -> T:
        with self._lock:
            entry = self._values.get(key)
            if entry is not None:
                stored_at, value = entry
                if self._clock() - stored_at < self.ttl_seconds:
                    return value
                del self._values[key]

            flight = self._inflight.get(key)
            leader = flight is None
            if leader:
                flight = _InFlight()
                self._inflight[key] = flight

        if not leader:
            flight.event.wait()
            if flight.error is not None:
                raise flight.error
            return flight.value

        try:
            value = fetcher()
        except BaseException as exc:
            flight.error = exc
            with self._lock:
                if self._inflight.get(key) is flight:
                    del self._inflight[key]
            flight.event.set()
            raise

        with self._lock:
            # An invalidation during the fetch drops the flight; the stale
            # result is still handed to waiters but never stored.
            if self._inflight.get(key) is flight:
                del self._inflight[key]
                if self.ttl_seconds > 0:
                    self._values[key] = (self._clock(), value)
        flight.value = value
        flight.event.set()
        return value

    def invalidate(self, *prefix: Hashable) -> None:
        """
        Drop every cached entry whose key starts with `prefix`.
        Calling with no arguments clears the whole cache.
        """
        with self._lock:
            for key in [k for k in self._values if _has_prefix(k, prefix)]:
                del self._values[key]
            for key in [k for k in self._inflight if _has_prefix(k, prefix)]:
                del self._inflight[key]
        logger.debug("Invalidated queries with prefix %s", prefix)

    def clear(self) -> None:
        self.invalidate()


query_cache = QueryCache(ttl_seconds=get_settings().QUERY_CACHE_TTL_SECONDS)
