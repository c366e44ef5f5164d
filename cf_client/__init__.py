# cf_client/__init__.py

from .client import CFClient
from .config import ClientSettings
from .exceptions import (
    CFClientError,
    ConfigurationError,
    ServiceCommunicationError,
    ResponseDecodeError,
    PaginationLimitError,
)
from .filters import ListOptions, TimestampFilter, RelationalOperator, filter_field, encode_query
from .pagination import Pager, auto_page
from .logging_config import setup_sdk_logging, get_sdk_logger

__all__ = [
    "CFClient",
    "ClientSettings",
    "CFClientError",
    "ConfigurationError",
    "ServiceCommunicationError",
    "ResponseDecodeError",
    "PaginationLimitError",
    "ListOptions",
    "TimestampFilter",
    "RelationalOperator",
    "filter_field",
    "encode_query",
    "Pager",
    "auto_page",
    "setup_sdk_logging",
    "get_sdk_logger",
]
