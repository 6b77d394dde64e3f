"""Store and connection protocols consumed by the cache (DIP).

RedisConnectionProvider is the production implementation; tests supply
in-memory doubles that satisfy the same protocols.
"""

from typing import Any, Protocol


class StoreClient(Protocol):
    """Narrow key-value store interface used by CacheService.

    Signatures follow redis-py with decode_responses=True.
    """

    def get(self, name: str) -> str | None:
        ...

    def set(self, name: str, value: str, ex: int | None = None) -> Any:
        """Write value; ex sets a TTL in seconds, None persists."""
        ...

    def delete(self, *names: str) -> int:
        """Remove keys; return how many existed."""
        ...

    def exists(self, *names: str) -> int:
        """Return how many of the given keys exist."""
        ...

    def incr(self, name: str) -> int:
        ...

    def decr(self, name: str) -> int:
        ...

    def scan(
        self, cursor: int = 0, match: str | None = None, count: int | None = None
    ) -> tuple[int, list[str]]:
        """Return (next_cursor, keys) for one SCAN round."""
        ...


class ConnectionProvider(Protocol):
    """Hands out one pooled store connection at a time."""

    def acquire(self) -> StoreClient:
        """Take a connection from the pool (may block until one is free)."""
        ...

    def release(self, client: StoreClient) -> None:
        """Return a connection obtained from acquire() to the pool."""
        ...
