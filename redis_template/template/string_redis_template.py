"""
Text-only template.
"""

from redis_template.core.config.constants import DEFAULT_STRING_ENCODING
from redis_template.core.interfaces import ConnectionFactory
from redis_template.serializer import StringRedisSerializer
from redis_template.template.redis_template import RedisTemplate


class StringRedisTemplate(RedisTemplate):
    """
    RedisTemplate whose keys, values, hash fields and hash values are all text.

    When a connection factory is given the template is initialized right away
    and ready to use.

    Usage:
        template = StringRedisTemplate(factory)
        template.ops_for_value().set("greeting", "hello")
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory | None = None,
        encoding: str = DEFAULT_STRING_ENCODING,
        expose_connection: bool = False,
    ):
        serializer = StringRedisSerializer(encoding)
        super().__init__(
            connection_factory,
            default_serializer=serializer,
            key_serializer=serializer,
            value_serializer=serializer,
            hash_key_serializer=serializer,
            hash_value_serializer=serializer,
            string_serializer=serializer,
            expose_connection=expose_connection,
        )
        if connection_factory is not None:
            self.after_properties_set()
