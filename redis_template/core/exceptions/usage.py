"""
Usage Exceptions

Raised when the template is called in a way that breaks its contract.

Author: System Architect
Date: 2026-03-02
"""

from redis_template.core.exceptions.base import RedisTemplateError


class InvalidDataAccessUsageError(RedisTemplateError):
    """
    Raised when the template API is misused.

    Common causes:
    - A key argument is None
    - A callback returns a value while running under a pipeline it does not own
    - Serializers are changed after the template was initialized
    - The template is used before after_properties_set()
    - An empty pub/sub channel name
    """
    pass
