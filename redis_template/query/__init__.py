from redis_template.query.query_utils import convert_query, reassemble
from redis_template.query.sort_query import (
    BulkMapper,
    Order,
    Range,
    SortParameters,
    SortQuery,
    SortQueryBuilder,
)

__all__ = [
    "BulkMapper",
    "Order",
    "Range",
    "SortParameters",
    "SortQuery",
    "SortQueryBuilder",
    "convert_query",
    "reassemble",
]
