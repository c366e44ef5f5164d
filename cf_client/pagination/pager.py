# cf_client/pagination/pager.py
import logging
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from cf_client.filters.base import ListOptions, PAGE_FIELD, PER_PAGE_FIELD
from cf_client.schemas.pagination import Pagination
from cf_client.schemas.common import Link

logger = logging.getLogger("cf_client.pagination.pager")


class QuerystringReader:
    """Читает параметры из query string ссылки навигации."""

    def __init__(self, page_url: str):
        # urlsplit бросает ValueError на некорректных URL (например, битый IPv6 host)
        parts = urlsplit(page_url)
        self._qs = parse_qs(parts.query, keep_blank_values=True)

    def get_str(self, key: str) -> str:
        values = self._qs.get(key)
        return values[0] if values else ""

    def get_int(self, key: str) -> Optional[int]:
        """Положительное целое или None, если параметра нет или он некорректен."""
        try:
            value = int(self.get_str(key))
        except ValueError:
            return None
        return value if value > 0 else None


class Pager:
    """
    Курсор по одному блоку пагинации ответа.

    Живет не дольше страницы, которую описывает: на каждый ответ создается новый Pager.
    Из ссылок next/previous берутся только page и per_page - фильтры остаются такими,
    какими их задал вызывающий код.
    """

    def __init__(self, pagination: Pagination):
        self.pagination = pagination

    @property
    def total_results(self) -> int:
        return self.pagination.total_results

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages

    def has_next_page(self) -> bool:
        return _has_href(self.pagination.next)

    def next_page(self, opts: ListOptions) -> bool:
        if not self.has_next_page():
            return False
        return _apply_link(self.pagination.next, opts)

    def has_previous_page(self) -> bool:
        return _has_href(self.pagination.previous)

    def previous_page(self, opts: ListOptions) -> bool:
        if not self.has_previous_page():
            return False
        return _apply_link(self.pagination.previous, opts)

    def __repr__(self) -> str:
        return (
            f"Pager(total_results={self.total_results}, total_pages={self.total_pages}, "
            f"has_next={self.has_next_page()}, has_previous={self.has_previous_page()})"
        )


def _has_href(link: Optional[Link]) -> bool:
    return link is not None and bool(link.href)


def _apply_link(link: Optional[Link], opts: ListOptions) -> bool:
    # Некорректная ссылка означает "навигация недоступна", а не ошибку:
    # уже полученная страница остается валидной, обход просто завершается.
    try:
        qs = QuerystringReader(link.href)
    except ValueError as e:
        logger.warning(f"Malformed pagination link '{link.href}': {e}. Treating as end of navigation.")
        return False
    opts.page = qs.get_int(PAGE_FIELD)
    opts.per_page = qs.get_int(PER_PAGE_FIELD)
    logger.debug(f"Pager moved options to page={opts.page}, per_page={opts.per_page}")
    return True
