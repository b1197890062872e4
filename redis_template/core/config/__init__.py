"""
Configuration Module

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Stage identifiers, store data types and fixed values

Usage:
------
```python
from redis_template.core.config import get_settings

settings = get_settings()
redis_host = settings.redis.REDIS_HOST
```

Environment Variables:
---------------------
```bash
REDIS_HOST=localhost
REDIS_PORT=6379
REDIS_MAX_CONNECTIONS=50
TEMPLATE_DEFAULT_SERIALIZER=json
LOG_LEVEL=INFO
LOG_FORMAT=json
```

Testing:
-------
```python
import os
from redis_template.core.config import reload_settings

os.environ["REDIS_HOST"] = "test-redis"
settings = reload_settings()
assert settings.redis.REDIS_HOST == "test-redis"
```
"""

from redis_template.core.config.constants import (
    DEFAULT_STRING_ENCODING,
    SUPPRESSED_CONNECTION_COMMANDS,
    DataType,
    Stage,
)
from redis_template.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "Stage",
    "DataType",
    # Constants
    "DEFAULT_STRING_ENCODING",
    "SUPPRESSED_CONNECTION_COMMANDS",
]
