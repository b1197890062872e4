"""
Sort query model.

A SortQuery describes a SORT call in caller terms (typed key, text patterns);
SortParameters is the same request with every pattern already encoded, ready
to hand to a connection.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from redis_template.core.exceptions import InvalidDataAccessUsageError

S = TypeVar("S")
T = TypeVar("T")

# Builds one record out of the values fetched by the GET patterns of one element
BulkMapper = Callable[[Sequence[S]], T]


class Order(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class Range:
    """LIMIT offset count."""

    start: int
    count: int

    def __post_init__(self):
        if self.start < 0 or self.count < 0:
            raise InvalidDataAccessUsageError(
                "LIMIT start and count must be non-negative",
                details={"start": self.start, "count": self.count},
            )


@dataclass(frozen=True)
class SortQuery:
    """
    SORT request for one key.

    Attributes:
        key: Key holding the list/set/sorted set to sort
        by_pattern: BY pattern (``"weight_*"``), or ``"nosort"``
        order: ASC or DESC (store default: ASC)
        alphabetic: Sort lexicographically instead of numerically
        limit: Optional LIMIT window
        get_patterns: GET patterns, in the order their values appear per element
    """

    key: Any
    by_pattern: str | None = None
    order: Order | None = None
    alphabetic: bool | None = None
    limit: Range | None = None
    get_patterns: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SortParameters:
    """Encoded SORT arguments as passed to StoreConnection.sort()."""

    by_pattern: bytes | None = None
    get_patterns: tuple[bytes, ...] = ()
    order: Order | None = None
    alphabetic: bool | None = None
    limit: Range | None = None


class SortQueryBuilder:
    """
    Fluent construction of a SortQuery.

    Usage:
        query = (
            SortQueryBuilder.sort("users")
            .by("user:*->age")
            .order(Order.DESC)
            .limit(0, 10)
            .get("user:*->name")
            .get("#")
            .build()
        )
    """

    def __init__(self, key: Any):
        self._key = key
        self._by_pattern: str | None = None
        self._order: Order | None = None
        self._alphabetic: bool | None = None
        self._limit: Range | None = None
        self._get_patterns: list[str] = []

    @classmethod
    def sort(cls, key: Any) -> "SortQueryBuilder":
        return cls(key)

    def by(self, pattern: str) -> "SortQueryBuilder":
        self._by_pattern = pattern
        return self

    def order(self, order: Order) -> "SortQueryBuilder":
        self._order = order
        return self

    def alphabetical(self, alphabetic: bool = True) -> "SortQueryBuilder":
        self._alphabetic = alphabetic
        return self

    def limit(self, start: int, count: int) -> "SortQueryBuilder":
        self._limit = Range(start, count)
        return self

    def get(self, pattern: str) -> "SortQueryBuilder":
        self._get_patterns.append(pattern)
        return self

    def build(self) -> SortQuery:
        return SortQuery(
            key=self._key,
            by_pattern=self._by_pattern,
            order=self._order,
            alphabetic=self._alphabetic,
            limit=self._limit,
            get_patterns=tuple(self._get_patterns),
        )
