"""Pytest configuration and fixtures for keycache.

FakeStore is an in-memory stand-in for a Redis connection that follows
redis-py's return conventions (decode_responses=True), including a
cursor-based SCAN that pages through keys in small batches.
TrackingProvider counts acquire/release so tests can assert the
connection scope discipline.
"""

import re

import pytest
import redis

from keycache.core.config import get_settings
from keycache.infrastructure.cache.redis_cache import CacheService
from keycache.infrastructure.cache.scanner import PatternScanner


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a Redis glob (with backslash escapes) to a regex."""
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("^" + "".join(out) + "$", re.DOTALL)


class FakeStore:
    """In-memory key-value store with redis-py shaped methods."""

    def __init__(self, scan_page_size: int = 3) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.scan_page_size = scan_page_size
        self.scan_calls: list[dict] = []
        self.delete_calls: list[tuple[str, ...]] = []
        # command name -> exception raised when that command is called
        self.failures: dict[str, Exception] = {}

    def _maybe_fail(self, command: str) -> None:
        if command in self.failures:
            raise self.failures[command]

    def get(self, name: str) -> str | None:
        self._maybe_fail("get")
        return self.data.get(name)

    def set(self, name: str, value: str, ex: int | None = None) -> bool:
        self._maybe_fail("set")
        self.data[name] = value
        if ex is None:
            self.ttls.pop(name, None)
        else:
            self.ttls[name] = ex
        return True

    def delete(self, *names: str) -> int:
        self._maybe_fail("delete")
        self.delete_calls.append(names)
        removed = 0
        for name in set(names):
            if name in self.data:
                del self.data[name]
                self.ttls.pop(name, None)
                removed += 1
        return removed

    def exists(self, *names: str) -> int:
        self._maybe_fail("exists")
        return sum(1 for name in names if name in self.data)

    def _adjust(self, name: str, delta: int) -> int:
        current = self.data.get(name, "0")
        try:
            value = int(current)
        except ValueError:
            raise redis.ResponseError(
                "value is not an integer or out of range"
            ) from None
        value += delta
        self.data[name] = str(value)
        return value

    def incr(self, name: str) -> int:
        self._maybe_fail("incr")
        return self._adjust(name, 1)

    def decr(self, name: str) -> int:
        self._maybe_fail("decr")
        return self._adjust(name, -1)

    def scan(
        self, cursor: int = 0, match: str | None = None, count: int | None = None
    ) -> tuple[int, list[str]]:
        """Page through sorted keys; the cursor is the next offset, 0 when done."""
        self._maybe_fail("scan")
        self.scan_calls.append({"cursor": cursor, "match": match, "count": count})
        keys = sorted(self.data)
        start = int(cursor)
        page = keys[start : start + self.scan_page_size]
        next_cursor = start + self.scan_page_size
        if next_cursor >= len(keys):
            next_cursor = 0
        if match is not None:
            regex = _glob_to_regex(match)
            page = [k for k in page if regex.match(k)]
        return next_cursor, page


class TrackingProvider:
    """ConnectionProvider over one FakeStore that records acquire/release."""

    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.acquired = 0
        self.released = 0
        self.outstanding = 0
        self.acquire_error: Exception | None = None

    def acquire(self) -> FakeStore:
        if self.acquire_error is not None:
            raise self.acquire_error
        self.acquired += 1
        self.outstanding += 1
        return self.store

    def release(self, client: FakeStore) -> None:
        assert client is self.store
        assert self.outstanding > 0, "connection released twice"
        self.released += 1
        self.outstanding -= 1


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test reads settings fresh from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def provider(store: FakeStore) -> TrackingProvider:
    return TrackingProvider(store)


@pytest.fixture
def cache(provider: TrackingProvider) -> CacheService:
    """CacheService over the fake store with a small scan batch."""
    return CacheService(provider, PatternScanner(batch_size=3))
