"""Data Access Object (DAO) implementation for short key mappings in Redis

This module provides a Redis-based implementation of KeyStoreBaseDAO.

Responsibilities:
    - Connect to Redis and verify the server answers before first use;
    - Store and retrieve short key to URL mappings in Redis;
    - Claim free short keys atomically (SET NX GET);
    - Translate connectivity failures into DataStoreError.

Classes:
    KeyStoreRedisDAO:
        DAO for storing and retrieving short key mappings in a Redis datastore.

Example:
    >>> from keyshortener.dao.redis import KeyStoreRedisDAO

    >>> dao = KeyStoreRedisDAO(prefix="keyshortener:dev")
    >>> dao.put_if_absent("3fGh_0aZk9", "https://example.com/page") is None
    True
    >>> dao.get("3fGh_0aZk9")
    'https://example.com/page'

NOTE:
    `put_if_absent()` relies on `SET ... NX GET`, which requires Redis 7.0 or newer.
"""

from typing import Optional

import redis
from beartype import beartype

from keyshortener.dao.base import KeyStoreBaseDAO
from keyshortener.dao.redis.helpers import REDIS_CONNECTIVITY_ERRORS, handle_redis_connection_error, redis_unreachable
from keyshortener.dao.redis.redis_key_schema import RedisKeySchema


class KeyStoreRedisDAO(KeyStoreBaseDAO):
    """Redis-based Data Access Object (DAO) for short key mappings

    Attributes:
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
            Responses are always decoded to str.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get(key: str) -> str | None:
            Retrieve the URL mapped to a short key.
            Raises DataStoreError on connectivity issues with Redis.

        put(key: str, url: str) -> KeyStoreRedisDAO:
            Map a short key to a URL (overwrites).
            Raises DataStoreError on connectivity issues with Redis.

        put_if_absent(key: str, url: str) -> str | None:
            Map a short key to a URL only if the key is free, in one atomic command.
            Raises DataStoreError on connectivity issues with Redis.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Connect to Redis and PING it once

        Either pass a pre-initialized `redis_client` (its responses must be
        decoded to str) or the connection parameters to build one.

        Args:
            redis_host, redis_port, redis_db (Optional):
                Location of the Redis server. Port and db may be given as strings.

            redis_username, redis_password (Optional[str]):
                Credentials for Redis authentication (if required).

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'keyshortener:prod'.

        Raises:
            DataStoreError:
                If Redis doesn't answer the PING (connection refused or timed out).
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                decode_responses=True,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        try:
            self.redis.ping()
        except REDIS_CONNECTIVITY_ERRORS as e:
            raise redis_unreachable(self.redis) from e

    @handle_redis_connection_error
    @beartype
    def get(self, key: str) -> str | None:
        """Retrieve the URL mapped to a short key

        Example:
            >>> dao.get('3fGh_0aZk9')
            'https://example.com'
        """
        return self.redis.get(self.keys.short_key_url_key(key))

    @handle_redis_connection_error
    @beartype
    def put(self, key: str, url: str) -> 'KeyStoreRedisDAO':
        """Map a short key to a URL, replacing any previous value

        Example:
            >>> dao.put('3fGh_0aZk9', 'https://example.com')
            <KeyStoreRedisDAO>
        """
        self.redis.set(self.keys.short_key_url_key(key), url)
        return self

    @handle_redis_connection_error
    @beartype
    def put_if_absent(self, key: str, url: str) -> str | None:
        """Claim a short key for a URL unless it is already taken

        NOTE: A read-then-write (GET followed by SET) leaves a window where two
              concurrent allocations both observe a free key:

              (lambda 1): GET <app>:keys:<key>:url  => nil
              ... interruption
              (lambda 2): GET <app>:keys:<key>:url  => nil
              (lambda 2): SET <app>:keys:<key>:url <url 2>
              (lambda 1): SET <app>:keys:<key>:url <url 1>  => <url 2> silently lost

              SET with NX and GET does the check and the write in a single
              command: the value is written only when the key is free, and
              the previous value (if any) is returned.

        Returns:
            str | None: None if the mapping was written, otherwise the URL already stored.

        Example:
            >>> dao.put_if_absent('3fGh_0aZk9', 'https://example.com')
            >>> dao.put_if_absent('3fGh_0aZk9', 'https://example.org')
            'https://example.com'
        """
        return self.redis.set(self.keys.short_key_url_key(key), url, nx=True, get=True)
