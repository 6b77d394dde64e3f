"""Cursor-driven key enumeration for a namespace.

Uses SCAN rather than KEYS so the store is never blocked. There is no
snapshot isolation: keys written or removed while the scan runs may be
missed or reported twice. The loop always terminates because the store
eventually returns the sentinel cursor.
"""

from __future__ import annotations

import logging
import re

from keycache.core.constants import DEFAULT_SCAN_BATCH_SIZE, SCAN_SENTINEL_CURSOR
from keycache.infrastructure.cache.store_protocol import StoreClient

logger = logging.getLogger(__name__)

_GLOB_SPECIAL_RE = re.compile(r"([*?\[\]\\])")


def match_pattern(prefix: str) -> str:
    """Return the SCAN MATCH pattern for keys containing prefix.

    Glob metacharacters in the prefix are escaped so they match literally.
    """
    escaped = _GLOB_SPECIAL_RE.sub(r"\\\1", prefix)
    return f"*{escaped}*"


class PatternScanner:
    """Collects every key whose name contains a namespace prefix."""

    def __init__(self, batch_size: int = DEFAULT_SCAN_BATCH_SIZE) -> None:
        """Initialize scanner.

        Args:
            batch_size: COUNT hint sent with each SCAN round (must be positive).
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got: {batch_size}")
        self.batch_size = batch_size

    def scan(self, client: StoreClient, prefix: str) -> list[str]:
        """Run SCAN rounds from the sentinel cursor until it comes back.

        Args:
            client: Store connection held by the caller's scope.
            prefix: Namespace prefix to look for.

        Returns:
            Every key returned across all rounds (duplicates possible).
        """
        pattern = match_pattern(prefix)
        keys: list[str] = []
        cursor = SCAN_SENTINEL_CURSOR
        rounds = 0
        while True:
            cursor, batch = client.scan(
                cursor=cursor, match=pattern, count=self.batch_size
            )
            cursor = int(cursor)
            rounds += 1
            if batch:
                keys.extend(batch)
            if cursor == SCAN_SENTINEL_CURSOR:
                break
        logger.debug(
            "Cache SCAN: %s (%s keys in %s rounds)", pattern, len(keys), rounds
        )
        return keys
