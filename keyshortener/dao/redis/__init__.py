from keyshortener.dao.redis.redis_key_schema import RedisKeySchema
from keyshortener.dao.redis.key_store_redis_dao import KeyStoreRedisDAO


__all__ = [
    'RedisKeySchema',
    'KeyStoreRedisDAO',
]
