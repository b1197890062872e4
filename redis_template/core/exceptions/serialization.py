"""
Serialization Exceptions
"""

from redis_template.core.exceptions.base import RedisTemplateError


class SerializationError(RedisTemplateError):
    """
    Raised when a serializer cannot encode or decode a value.

    Common causes:
    - Object not picklable / not JSON serializable
    - Stored bytes written by a different serializer
    - Invalid text encoding
    """
    pass
