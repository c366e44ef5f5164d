# cf_client/pagination/auto_pager.py
import logging
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

from cf_client.exceptions import PaginationLimitError
from cf_client.filters.base import ListOptions
from .pager import Pager

logger = logging.getLogger("cf_client.pagination.auto_pager")

OptionsType = TypeVar("OptionsType", bound=ListOptions)
ResourceType = TypeVar("ResourceType")

# Функция получения одной страницы: (opts) -> (ресурсы страницы, Pager)
ListFunc = Callable[[OptionsType], Awaitable[Tuple[List[ResourceType], Pager]]]


async def auto_page(
    opts: OptionsType,
    list_func: ListFunc[OptionsType, ResourceType],
    *,
    max_pages: Optional[int] = None,
) -> List[ResourceType]:
    """
    Последовательно запрашивает все страницы коллекции и склеивает ресурсы в порядке сервера.

    Страницы запрашиваются строго по одной: параметры следующего запроса зависят от
    текущего ответа. Любое исключение list_func прерывает обход, накопленные
    ресурсы отбрасываются - вызывающий код получает либо весь список, либо ошибку.

    Обход заканчивается, когда сервер перестает отдавать ссылку next. Ограничения по
    умолчанию нет; max_pages включает явный лимит, при превышении которого
    бросается PaginationLimitError (список не обрезается молча).

    opts изменяется на месте (page/per_page), поэтому один объект опций
    нельзя использовать в нескольких одновременных обходах.
    """
    if max_pages is not None and max_pages < 1:
        raise ValueError(f"max_pages must be >= 1, got {max_pages}")

    all_resources: List[ResourceType] = []
    fetched = 0
    while True:
        resources, pager = await list_func(opts)
        fetched += 1
        all_resources.extend(resources)
        logger.debug(
            f"Auto-pager fetched page {fetched} ({len(resources)} resources, {len(all_resources)} total)"
        )
        if not pager.has_next_page():
            break
        if max_pages is not None and fetched >= max_pages:
            raise PaginationLimitError(max_pages=max_pages, fetched=fetched)
        if not pager.next_page(opts):
            break
    logger.info(f"Auto-pager finished after {fetched} page(s), {len(all_resources)} resources")
    return all_resources
