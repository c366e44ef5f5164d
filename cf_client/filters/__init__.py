# cf_client/filters/__init__.py

from .base import (
    ListOptions,
    TimestampFilter,
    RelationalOperator,
    filter_field,
    encode_query,
    encode_query_params,
    PAGE_FIELD,
    PER_PAGE_FIELD,
)

__all__ = [
    "ListOptions",
    "TimestampFilter",
    "RelationalOperator",
    "filter_field",
    "encode_query",
    "encode_query_params",
    "PAGE_FIELD",
    "PER_PAGE_FIELD",
]
