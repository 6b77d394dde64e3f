"""Redis-backed cache service.

Namespaced, TTL-aware get/set/delete/exists/incr/decr plus bulk delete by
prefix. Each call holds exactly one pooled connection (see
connection_scope); values are converted with the codec outside that scope.
"""

from __future__ import annotations

from typing import Any, TypeVar

from keycache.core.config import Settings, get_settings
from keycache.domain.exceptions import CacheException
from keycache.domain.key_prefix import KeyPrefix
from keycache.infrastructure.cache import codec
from keycache.infrastructure.cache.connection import (
    RedisConnectionProvider,
    build_connection_pool,
    connection_scope,
)
from keycache.infrastructure.cache.scanner import PatternScanner
from keycache.infrastructure.cache.store_protocol import ConnectionProvider
from keycache.shared.telemetry import (
    TracedOperation,
    add_span_attributes,
    get_logger,
    set_span_error,
    traced,
)

logger = get_logger(__name__)

T = TypeVar("T")


class CacheService:
    """Typed cache facade over a pooled key-value store.

    Safe for concurrent callers: there is no in-process state besides the
    provider, and each operation acquires and releases its own connection.
    Store failures surface as StoreUnavailableError / StoreCommandError,
    except in delete_by_prefix, which reports them as False.
    """

    def __init__(
        self,
        provider: ConnectionProvider,
        scanner: PatternScanner | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            provider: Source of pooled store connections.
            scanner: Key scanner for bulk deletes (default batch size if omitted).
        """
        self.provider = provider
        self.scanner = scanner or PatternScanner()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> CacheService:
        """Build a service with a Redis pool configured from settings."""
        settings = settings or get_settings()
        pool = build_connection_pool(settings)
        logger.info(
            "Redis cache pool created: %s:%s db=%s (max %s connections)",
            settings.redis_host,
            settings.redis_port,
            settings.redis_db,
            settings.redis_max_connections,
        )
        return cls(
            RedisConnectionProvider(pool),
            PatternScanner(batch_size=settings.scan_batch_size),
        )

    @traced("cache.get")
    def get(self, policy: KeyPrefix, key: str, kind: type[Any] = str) -> Any:
        """Return the cached value decoded as kind, or None if absent.

        Args:
            policy: Namespace of the key.
            key: Bare key (the prefix is added here).
            kind: Expected type: int, str, or any pydantic-validatable type.

        Returns:
            Decoded value or None.

        Raises:
            SerializationError: Stored text is not a valid kind.
            StoreUnavailableError: Pool exhausted or store unreachable.
        """
        real_key = policy.real_key(key)
        with connection_scope(self.provider) as client:
            raw = client.get(real_key)
        if raw is None:
            logger.debug("Cache MISS: %s", real_key)
            return None
        logger.debug("Cache HIT: %s", real_key)
        return codec.decode(raw, kind)

    def get_int(self, policy: KeyPrefix, key: str) -> int | None:
        return self.get(policy, key, int)

    def get_str(self, policy: KeyPrefix, key: str) -> str | None:
        return self.get(policy, key, str)

    def get_struct(self, policy: KeyPrefix, key: str, kind: type[T]) -> T | None:
        """Return a JSON-stored value validated as kind (model, dataclass, dict...)."""
        return self.get(policy, key, kind)

    @traced("cache.set")
    def set(self, policy: KeyPrefix, key: str, value: Any) -> bool:
        """Store value under the policy's TTL.

        Nothing is written (and no connection is taken) when value encodes
        to None or an empty string.

        Args:
            policy: Namespace and expiry for the key.
            key: Bare key.
            value: Value to cache.

        Returns:
            True if written, False if there was nothing to write.

        Raises:
            SerializationError: Structured value cannot be serialized.
            StoreUnavailableError: Pool exhausted or store unreachable.
        """
        serialized = codec.encode(value)
        if not serialized:
            logger.debug("Cache SET skipped (empty value): %s", policy.real_key(key))
            return False
        real_key = policy.real_key(key)
        with connection_scope(self.provider) as client:
            if policy.has_expiry:
                client.set(real_key, serialized, ex=policy.expire_seconds)
            else:
                client.set(real_key, serialized)
        logger.debug("Cache SET: %s (TTL: %ss)", real_key, policy.expire_seconds)
        return True

    @traced("cache.delete")
    def delete(self, policy: KeyPrefix, key: str) -> bool:
        """Remove one key. Returns True only if the key existed."""
        real_key = policy.real_key(key)
        with connection_scope(self.provider) as client:
            removed = client.delete(real_key)
        logger.debug("Cache DELETE: %s (removed=%s)", real_key, removed)
        return removed > 0

    @traced("cache.exists")
    def exists(self, policy: KeyPrefix, key: str) -> bool:
        with connection_scope(self.provider) as client:
            return client.exists(policy.real_key(key)) > 0

    @traced("cache.incr")
    def incr(self, policy: KeyPrefix, key: str) -> int:
        """Atomically add one; an absent key counts from 0.

        Raises:
            StoreCommandError: Existing value is not an integer.
        """
        with connection_scope(self.provider) as client:
            return int(client.incr(policy.real_key(key)))

    @traced("cache.decr")
    def decr(self, policy: KeyPrefix, key: str) -> int:
        """Atomically subtract one; an absent key counts from 0.

        Raises:
            StoreCommandError: Existing value is not an integer.
        """
        with connection_scope(self.provider) as client:
            return int(client.decr(policy.real_key(key)))

    @traced("cache.scan_keys")
    def scan_keys(self, policy: KeyPrefix) -> list[str]:
        """Return every store key containing the policy's prefix."""
        with connection_scope(self.provider) as client:
            return self.scanner.scan(client, policy.prefix)

    @traced("cache.delete_by_prefix")
    def delete_by_prefix(self, policy: KeyPrefix | None) -> bool:
        """Delete every key in the policy's namespace.

        Two phases on one connection: SCAN for matching keys, then a single
        DEL of what was found. This is not atomic; a key written between
        the two phases may survive. Store errors in either phase are logged
        and reported as False without saying how many keys were removed.

        Args:
            policy: Namespace to clear; None returns False.

        Returns:
            True if the namespace was cleared (or already empty), else False.
        """
        if policy is None:
            return False
        try:
            with connection_scope(self.provider) as client:
                with TracedOperation("cache.delete_by_prefix.scan"):
                    keys = self.scanner.scan(client, policy.prefix)
                if not keys:
                    return True
                removed = client.delete(*keys)
        except CacheException as e:
            set_span_error(e)
            logger.exception("Cache delete_by_prefix error for %s", policy.prefix)
            return False
        add_span_attributes(matched=len(keys), removed=removed)
        logger.info(
            "Cache INVALIDATE: %s (%s keys matched, %s removed)",
            policy.prefix,
            len(keys),
            removed,
        )
        return True
