# cf_client/clients/resource.py
import logging
from typing import ClassVar, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel as PydanticBaseModel

from cf_client.filters.base import ListOptions
from cf_client.pagination.auto_pager import auto_page
from cf_client.pagination.pager import Pager
from .base import BaseHttpClient, path, with_query

logger = logging.getLogger("cf_client.clients.resource")

ResourceType = TypeVar("ResourceType", bound=PydanticBaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=PydanticBaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=PydanticBaseModel)
ListOptionsType = TypeVar("ListOptionsType", bound=ListOptions)


class ResourceClient(Generic[ResourceType, CreateSchemaType, UpdateSchemaType, ListOptionsType]):
    """
    CRUD и постраничный список для одной коллекции v3 API (например /v3/builds).

    Наследник задает collection_path, resource_cls и options_cls; общий
    BaseHttpClient разделяется между всеми клиентами ресурсов.
    """

    collection_path: ClassVar[str]
    resource_cls: ClassVar[Type[PydanticBaseModel]]
    options_cls: ClassVar[Type[ListOptions]]

    def __init__(self, client: BaseHttpClient):
        self.client = client

    @property
    def resource_name(self) -> str:
        return self.resource_cls.__name__.lower()

    def _item_path(self, guid: str) -> str:
        return f"{self.collection_path}/{path('%s', guid)}"

    def new_list_options(self) -> ListOptionsType:
        return self.options_cls()  # type: ignore[return-value]

    async def create(self, r: CreateSchemaType) -> ResourceType:
        logger.info(f"Client CREATE: creating {self.resource_name} at {self.collection_path}")
        return await self.client.post(self.collection_path, r, self.resource_cls, f"create {self.resource_name}")

    async def get(self, guid: str) -> ResourceType:
        logger.info(f"Client GET: fetching {self.resource_name} {guid}")
        return await self.client.get(self._item_path(guid), self.resource_cls, f"get {self.resource_name}")

    async def update(self, guid: str, r: UpdateSchemaType) -> ResourceType:
        logger.info(f"Client UPDATE: updating {self.resource_name} {guid}")
        return await self.client.patch(self._item_path(guid), r, self.resource_cls, f"update {self.resource_name}")

    async def delete(self, guid: str) -> Optional[str]:
        """Удаляет ресурс. Возвращает URL задачи удаления, если сервер удаляет асинхронно."""
        logger.info(f"Client DELETE: deleting {self.resource_name} {guid}")
        return await self.client.delete(self._item_path(guid))

    async def list(self, opts: Optional[ListOptionsType] = None) -> Tuple[List[ResourceType], Pager]:
        """Одна страница коллекции и Pager для ручного перехода между страницами."""
        if opts is None:
            opts = self.new_list_options()
        return await self._list_page(self.collection_path, opts, f"list {self.resource_name}")

    async def list_all(
        self, opts: Optional[ListOptionsType] = None, *, max_pages: Optional[int] = None
    ) -> List[ResourceType]:
        """Все ресурсы коллекции, начиная со страницы из opts."""
        if opts is None:
            opts = self.new_list_options()
        return await auto_page(opts, self.list, max_pages=max_pages)

    async def _list_page(
        self, base_path: str, opts: ListOptions, operation: str
    ) -> Tuple[List[ResourceType], Pager]:
        request_path = with_query(base_path, opts)
        logger.debug(f"Client LIST: fetching page {request_path}")
        return await self.client.get_page(request_path, self.resource_cls, operation)
