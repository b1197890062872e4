"""
In-memory keyspace shared by every InMemoryConnection of one factory.

Values are held in the shape of their store type:
    bytes         STRING
    list[bytes]   LIST
    set[bytes]    SET
    SortedSet     ZSET  (member -> score)
    dict          HASH  (field -> value)

Every write bumps the key's version, which is what WATCH compares at EXEC.
Expiry is lazy: an expired key is dropped the next time it is looked at.

Note: callers must hold ``lock`` around every access.
"""

import threading
import time
from typing import Any

from redis_template.core.config.constants import DataType
from redis_template.core.exceptions import StoreCommandError

WRONGTYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"


class SortedSet(dict):
    """member -> score"""

    def ordered(self) -> list[tuple[bytes, float]]:
        return sorted(self.items(), key=lambda item: (item[1], item[0]))


class _Database:
    __slots__ = ("data", "deadlines")

    def __init__(self):
        self.data: dict[bytes, Any] = {}
        self.deadlines: dict[bytes, float] = {}


class InMemoryStore:
    """Numbered databases, key versions and the lock that guards them."""

    def __init__(self):
        self.lock = threading.RLock()
        self._databases: dict[int, _Database] = {}
        self._versions: dict[tuple[int, bytes], int] = {}
        self._clock = 0

    def _database(self, db: int) -> _Database:
        database = self._databases.get(db)
        if database is None:
            database = self._databases[db] = _Database()
        return database

    # -------------------------------------------------------------------------
    # Versions
    # -------------------------------------------------------------------------

    def touch(self, db: int, key: bytes) -> None:
        self._clock += 1
        self._versions[(db, key)] = self._clock

    def version(self, db: int, key: bytes) -> int:
        self.lookup(db, key)
        return self._versions.get((db, key), 0)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def lookup(self, db: int, key: bytes) -> Any:
        """Live value of key, or None."""
        database = self._database(db)
        deadline = database.deadlines.get(key)
        if deadline is not None and deadline <= time.time():
            self.remove(db, key)
            return None
        return database.data.get(key)

    def typed(self, db: int, key: bytes, kind: type, create: bool = False) -> Any:
        """
        Live value of key, checked against the expected container type.

        Args:
            create: Store and return an empty container when the key is missing

        Raises:
            StoreCommandError: If the key holds another type
        """
        value = self.lookup(db, key)
        if value is None:
            if not create:
                return None
            value = kind()
            self._database(db).data[key] = value
            return value
        if kind is dict and isinstance(value, SortedSet):
            raise StoreCommandError(WRONGTYPE, details={"key": key})
        if not isinstance(value, kind):
            raise StoreCommandError(WRONGTYPE, details={"key": key})
        return value

    def put(self, db: int, key: bytes, value: Any, keep_ttl: bool = False) -> None:
        database = self._database(db)
        database.data[key] = value
        if not keep_ttl:
            database.deadlines.pop(key, None)
        self.touch(db, key)

    def remove(self, db: int, key: bytes) -> bool:
        database = self._database(db)
        database.deadlines.pop(key, None)
        if database.data.pop(key, None) is None:
            return False
        self.touch(db, key)
        return True

    def cleanup(self, db: int, key: bytes) -> None:
        """Drop a container that became empty."""
        value = self._database(db).data.get(key)
        if value is not None and not isinstance(value, bytes) and not value:
            self.remove(db, key)

    def live_keys(self, db: int) -> list[bytes]:
        return [key for key in list(self._database(db).data) if self.lookup(db, key) is not None]

    # -------------------------------------------------------------------------
    # Expiry
    # -------------------------------------------------------------------------

    def set_deadline(self, db: int, key: bytes, deadline: float) -> None:
        self._database(db).deadlines[key] = deadline
        self.touch(db, key)

    def deadline(self, db: int, key: bytes) -> float | None:
        return self._database(db).deadlines.get(key)

    def clear_deadline(self, db: int, key: bytes) -> bool:
        if self._database(db).deadlines.pop(key, None) is None:
            return False
        self.touch(db, key)
        return True

    # -------------------------------------------------------------------------
    # Type
    # -------------------------------------------------------------------------

    def type_of(self, db: int, key: bytes) -> DataType:
        value = self.lookup(db, key)
        if value is None:
            return DataType.NONE
        if isinstance(value, bytes):
            return DataType.STRING
        if isinstance(value, list):
            return DataType.LIST
        if isinstance(value, set):
            return DataType.SET
        if isinstance(value, SortedSet):
            return DataType.ZSET
        return DataType.HASH

    def flush(self) -> None:
        """Drop every database."""
        with self.lock:
            self._databases.clear()
            self._versions.clear()
