"""Domain layer: key namespace policy and cache exceptions."""

from keycache.domain.exceptions import (
    CacheException,
    OverlappingPrefixError,
    SerializationError,
    StoreCommandError,
    StoreUnavailableError,
)
from keycache.domain.key_prefix import KeyPrefix, ensure_disjoint

__all__ = [
    "CacheException",
    "KeyPrefix",
    "OverlappingPrefixError",
    "SerializationError",
    "StoreCommandError",
    "StoreUnavailableError",
    "ensure_disjoint",
]
