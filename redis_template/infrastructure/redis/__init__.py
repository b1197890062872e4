from redis_template.infrastructure.redis.connection import BoundPipeline, RedisConnection, translate_error
from redis_template.infrastructure.redis.factory import RedisConnectionFactory, create_redis_template

__all__ = [
    "BoundPipeline",
    "RedisConnection",
    "RedisConnectionFactory",
    "create_redis_template",
    "translate_error",
]
