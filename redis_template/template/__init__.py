"""
Template layer: execution engine and the helpers it is built from.
"""

from redis_template.template.batch_controller import BatchController
from redis_template.template.close_suppressing import CloseSuppressingConnection
from redis_template.template.connection_binder import ConnectionBinder
from redis_template.template.redis_template import (
    PipelineCallback,
    RedisCallback,
    RedisTemplate,
    SessionCallback,
)
from redis_template.template.string_redis_template import StringRedisTemplate

__all__ = [
    "BatchController",
    "CloseSuppressingConnection",
    "ConnectionBinder",
    "PipelineCallback",
    "RedisCallback",
    "RedisTemplate",
    "SessionCallback",
    "StringRedisTemplate",
]
