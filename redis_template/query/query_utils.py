"""
Sort query translation.

convert_query() turns a SortQuery into SortParameters; reassemble() turns the
flat reply of a SORT ... GET ... GET ... call back into one record per
sorted element.
"""

from collections.abc import Sequence
from typing import Any

from redis_template.core.exceptions import IncompleteSortResultError, InvalidDataAccessUsageError
from redis_template.query.sort_query import BulkMapper, SortParameters, SortQuery
from redis_template.serializer.base import RedisSerializer


def convert_query(query: SortQuery, string_serializer: RedisSerializer[str]) -> SortParameters:
    """
    Encode the patterns of a sort query.

    Args:
        query: Caller-level query
        string_serializer: Serializer used for BY and GET patterns

    Returns:
        SortParameters for StoreConnection.sort()
    """
    by_pattern = None
    if query.by_pattern is not None:
        by_pattern = string_serializer.serialize(query.by_pattern)

    get_patterns = tuple(string_serializer.serialize(pattern) for pattern in query.get_patterns)

    return SortParameters(
        by_pattern=by_pattern,
        get_patterns=get_patterns,
        order=query.order,
        alphabetic=query.alphabetic,
        limit=query.limit,
    )


def reassemble(values: Sequence[Any] | None, bulk_size: int, bulk_mapper: BulkMapper) -> list[Any]:
    """
    Group a flat SORT reply into records.

    Element i of the result is bulk_mapper(values[i*bulk_size:(i+1)*bulk_size]).

    Args:
        values: Decoded flat reply
        bulk_size: Number of GET patterns in the query
        bulk_mapper: Builds one record from one group

    Returns:
        Records in reply order; [] for an empty or missing reply

    Raises:
        InvalidDataAccessUsageError: If bulk_size is below 1 (query without GET patterns)
        IncompleteSortResultError: If the reply length is not a multiple of bulk_size
    """
    if bulk_size < 1:
        raise InvalidDataAccessUsageError(
            "A bulk mapper needs at least one GET pattern in the sort query",
            details={"bulk_size": bulk_size},
        )
    if not values:
        return []

    remainder = len(values) % bulk_size
    if remainder:
        raise IncompleteSortResultError(
            f"Sort reply of {len(values)} values does not split into groups of {bulk_size}",
            details={"values": len(values), "bulk_size": bulk_size, "trailing": remainder},
        )

    return [
        bulk_mapper(tuple(values[start:start + bulk_size]))
        for start in range(0, len(values), bulk_size)
    ]
