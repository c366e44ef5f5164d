# cf_client/pagination/__init__.py

from .pager import Pager, QuerystringReader
from .auto_pager import auto_page

__all__ = [
    "Pager",
    "QuerystringReader",
    "auto_page",
]
