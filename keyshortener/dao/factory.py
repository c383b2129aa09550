"""Key store construction from configuration.

Functions:
    key_store_from_config(config: dict) -> KeyStoreBaseDAO:
        Build the key store DAO for the configured backend.

    default_key_store(lambda_name: str) -> KeyStoreBaseDAO:
        Key store for a lambda's configuration. Lambdas loading the same
        configuration in one process share a single instance.

Example:
    >>> key_store_from_config({'redis': {'host': 'localhost', 'port': 6379, 'db': 0}})
    <KeyStoreRedisDAO>
    >>> key_store_from_config({'memory': {}})
    <KeyStoreMemoryDAO>
"""

import json
import functools
import logging

from keyshortener.dao.base import KeyStoreBaseDAO
from keyshortener.exceptions import BadConfigurationError
from keyshortener.utils.config import app_prefix, load_config
from keyshortener.utils.constants import MEMORY_BACKEND, REDIS_BACKEND, SQL_BACKEND


logger = logging.getLogger(__name__)


def key_store_from_config(config: dict) -> KeyStoreBaseDAO:
    """Build a key store DAO from a `{<backend>: {...}}` configuration

    Backend options are passed to the DAO constructor prefixed with the
    backend name, e.g. `{'redis': {'host': 'h'}}` becomes `redis_host='h'`.

    Raises:
        BadConfigurationError:
            If the configuration doesn't name exactly one supported backend.
        DataStoreError:
            If the backend can't be reached.
    """
    if len(config) != 1:
        raise BadConfigurationError(f'Expected exactly one key store backend (given: {sorted(config)}).')

    backend, options = next(iter(config.items()))
    options = options or {}
    logger.debug('Initializing key store.', extra={'backend': backend})

    if backend == MEMORY_BACKEND:
        from keyshortener.dao.memory import KeyStoreMemoryDAO

        return KeyStoreMemoryDAO()
    elif backend == REDIS_BACKEND:
        from keyshortener.dao.redis import KeyStoreRedisDAO

        return KeyStoreRedisDAO(**{f'redis_{k}': v for k, v in options.items()}, prefix=app_prefix())
    elif backend == SQL_BACKEND:
        from keyshortener.dao.sql import KeyStoreSQLDAO

        return KeyStoreSQLDAO(**{f'sql_{k}': v for k, v in options.items()})
    else:
        raise BadConfigurationError(f"Unsupported key store backend '{backend}'.")


def default_key_store(lambda_name: str) -> KeyStoreBaseDAO:
    # Lambdas resolving to the same configuration share one store instance
    return _cached_key_store(json.dumps(load_config(lambda_name), sort_keys=True))


@functools.cache
def _cached_key_store(serialized_config: str) -> KeyStoreBaseDAO:
    return key_store_from_config(json.loads(serialized_config))
