"""Cache: Redis service, value codec, connection scope and key scanner.

CacheService is the entry point; build it with CacheService.from_settings()
or inject a ConnectionProvider (tests use an in-memory one).
"""

from keycache.infrastructure.cache.codec import decode, encode
from keycache.infrastructure.cache.connection import (
    RedisConnectionProvider,
    build_connection_pool,
    connection_scope,
)
from keycache.infrastructure.cache.redis_cache import CacheService
from keycache.infrastructure.cache.scanner import PatternScanner, match_pattern
from keycache.infrastructure.cache.store_protocol import ConnectionProvider, StoreClient

__all__ = [
    "CacheService",
    "ConnectionProvider",
    "PatternScanner",
    "RedisConnectionProvider",
    "StoreClient",
    "build_connection_pool",
    "connection_scope",
    "decode",
    "encode",
    "match_pattern",
]
