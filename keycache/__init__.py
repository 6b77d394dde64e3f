"""keycache: namespaced, TTL-aware Redis caching facade."""

from keycache.domain import (
    CacheException,
    KeyPrefix,
    OverlappingPrefixError,
    SerializationError,
    StoreCommandError,
    StoreUnavailableError,
    ensure_disjoint,
)
from keycache.infrastructure.cache import CacheService
from keycache.shared.telemetry.logging import install_null_handler

install_null_handler()

__all__ = [
    "CacheException",
    "CacheService",
    "KeyPrefix",
    "OverlappingPrefixError",
    "SerializationError",
    "StoreCommandError",
    "StoreUnavailableError",
    "ensure_disjoint",
]
