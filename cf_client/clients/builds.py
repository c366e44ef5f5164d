# cf_client/clients/builds.py
from typing import List, Optional, Tuple

from cf_client.filters.base import ListOptions, filter_field
from cf_client.pagination.auto_pager import auto_page
from cf_client.pagination.pager import Pager
from cf_client.schemas.build import Build, BuildCreate, BuildUpdate
from .base import path
from .resource import ResourceClient


class BuildListOptions(ListOptions):
    states: List[str] = filter_field("states", default_factory=list)
    app_guids: List[str] = filter_field("app_guids", default_factory=list)
    package_guids: List[str] = filter_field("package_guids", default_factory=list)


class BuildAppListOptions(ListOptions):
    states: List[str] = filter_field("states", default_factory=list)


class BuildClient(ResourceClient[Build, BuildCreate, BuildUpdate, BuildListOptions]):
    collection_path = "/v3/builds"
    resource_cls = Build
    options_cls = BuildListOptions

    async def list_for_app(
        self, app_guid: str, opts: Optional[BuildAppListOptions] = None
    ) -> Tuple[List[Build], Pager]:
        """Одна страница сборок приложения."""
        if opts is None:
            opts = BuildAppListOptions()
        return await self._list_page(path("/v3/apps/%s/builds", app_guid), opts, "list builds for app")

    async def list_for_app_all(
        self, app_guid: str, opts: Optional[BuildAppListOptions] = None, *, max_pages: Optional[int] = None
    ) -> List[Build]:
        if opts is None:
            opts = BuildAppListOptions()
        return await auto_page(opts, lambda o: self.list_for_app(app_guid, o), max_pages=max_pages)
