"""Pooled Redis connections and the per-operation connection scope.

Every cache operation runs inside connection_scope(): one connection is
acquired on entry and released exactly once on exit, whatever the exit
path. redis-py errors raised while acquiring or inside the scope are
translated to cache exceptions here and nowhere else.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import redis

from keycache.core.config import Settings
from keycache.domain.exceptions import StoreCommandError, StoreUnavailableError
from keycache.infrastructure.cache.store_protocol import ConnectionProvider, StoreClient

logger = logging.getLogger(__name__)


def build_connection_pool(settings: Settings) -> redis.BlockingConnectionPool:
    """Create the process-wide Redis pool from settings.

    The pool blocks callers when all connections are in use and raises
    redis.ConnectionError after redis_pool_timeout seconds.

    Args:
        settings: Loaded application settings.

    Returns:
        Blocking connection pool returning str responses.
    """
    return redis.BlockingConnectionPool(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=(
            settings.redis_password.get_secret_value()
            if settings.redis_password
            else None
        ),
        max_connections=settings.redis_max_connections,
        timeout=settings.redis_pool_timeout,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
        socket_keepalive=True,
        decode_responses=True,
    )


class RedisConnectionProvider:
    """ConnectionProvider backed by a redis-py connection pool.

    acquire() pins one pooled connection to a single-connection client;
    release() hands it back to the pool.
    """

    def __init__(self, pool: redis.ConnectionPool) -> None:
        self.pool = pool

    def acquire(self) -> redis.Redis:
        return redis.Redis(connection_pool=self.pool, single_connection_client=True)

    def release(self, client: redis.Redis) -> None:
        # close() returns the pinned connection; the pool itself stays open.
        client.close()

    def disconnect(self) -> None:
        """Close every pooled connection. Call on shutdown."""
        self.pool.disconnect()
        logger.info("Redis connection pool disconnected")


@contextmanager
def connection_scope(provider: ConnectionProvider) -> Iterator[StoreClient]:
    """Hold one pooled connection for the duration of a with-block.

    Args:
        provider: Source of pooled connections.

    Yields:
        Store client bound to the acquired connection.

    Raises:
        StoreUnavailableError: Pool exhausted or store unreachable.
        StoreCommandError: Store rejected connection setup or a command
            issued in the block.
    """
    try:
        client = provider.acquire()
    except (redis.ConnectionError, redis.TimeoutError) as e:
        raise StoreUnavailableError(str(e)) from e
    except redis.RedisError as e:
        # e.g. SELECT rejected while the pooled connection is set up
        raise StoreCommandError(str(e)) from e
    try:
        yield client
    except (redis.ConnectionError, redis.TimeoutError) as e:
        raise StoreUnavailableError(str(e)) from e
    except redis.RedisError as e:
        raise StoreCommandError(str(e)) from e
    finally:
        provider.release(client)
