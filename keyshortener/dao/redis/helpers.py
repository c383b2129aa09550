import functools
from typing import Any
from collections.abc import Callable

import redis

from keyshortener.dao.exceptions import DataStoreError


__all__ = []

# Errors meaning the server couldn't be reached, as opposed to a rejected command
REDIS_CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_unreachable(client: redis.Redis) -> DataStoreError:
    """Build the DataStoreError reported when `client` can't reach its server

    Example:
        >>> redis_unreachable(redis.Redis(host='redis', port=6379, db=0))
        DataStoreError("Can't connect to Redis at redis:6379/0.")
    """
    info = client.connection_pool.connection_kwargs
    return DataStoreError(f"Can't connect to Redis at {info.get('host')}:{info.get('port')}/{info.get('db')}.")


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    The wrapped method's instance must expose its client as `self.redis`.
    Only connectivity failures are translated; other Redis errors propagate unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_CONNECTIVITY_ERRORS as e:
            raise redis_unreachable(self.redis) from e

    return wrapper
