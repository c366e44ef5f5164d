# cf_client/clients/droplets.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Tuple

import httpx

from cf_client.filters.base import ListOptions, filter_field
from cf_client.pagination.auto_pager import auto_page
from cf_client.pagination.pager import Pager
from cf_client.schemas.common import ToOneRelationship
from cf_client.schemas.droplet import (
    Droplet,
    DropletCopy,
    DropletCreate,
    DropletCurrent,
    DropletUpdate,
)
from .base import path
from .resource import ResourceClient

logger = logging.getLogger("cf_client.clients.droplets")


class DropletListOptions(ListOptions):
    guids: List[str] = filter_field("guids", default_factory=list)
    states: List[str] = filter_field("states", default_factory=list)
    app_guids: List[str] = filter_field("app_guids", default_factory=list)
    space_guids: List[str] = filter_field("space_guids", default_factory=list)
    organization_guids: List[str] = filter_field("organization_guids", default_factory=list)


class DropletPackageListOptions(ListOptions):
    guids: List[str] = filter_field("guids", default_factory=list)
    states: List[str] = filter_field("states", default_factory=list)


class DropletAppListOptions(ListOptions):
    guids: List[str] = filter_field("guids", default_factory=list)
    states: List[str] = filter_field("states", default_factory=list)
    # True - только текущий droplet приложения; None - параметр не передается
    current: Optional[bool] = filter_field("current")


class DropletClient(ResourceClient[Droplet, DropletCreate, DropletUpdate, DropletListOptions]):
    collection_path = "/v3/droplets"
    resource_cls = Droplet
    options_cls = DropletListOptions

    async def copy(self, src_droplet_guid: str, dest_app_guid: str) -> Droplet:
        """
        Копирует droplet в другое приложение.
        Переменные окружения исходного droplet не копируются.
        """
        logger.info(f"Client COPY: copying droplet {src_droplet_guid} to app {dest_app_guid}")
        return await self.client.post(
            path("/v3/droplets?source_guid=%s", src_droplet_guid),
            DropletCopy.to_app(dest_app_guid),
            Droplet,
            "copy droplet",
        )

    async def download(self, guid: str) -> bytes:
        """
        Скачивает gzip-архив droplet.
        Сервер отвечает редиректом во внутренний blobstore, клиент следует за ним.
        """
        request_path = path("/v3/droplets/%s/download", guid)
        logger.info(f"Client DOWNLOAD: downloading droplet bits from {request_path}")
        response = await self.client.request("GET", request_path, allowed_statuses=[200], follow_redirects=True)
        return response.content

    @asynccontextmanager
    async def download_stream(self, guid: str) -> AsyncIterator[httpx.Response]:
        """
        Потоковое скачивание droplet без загрузки архива в память:

            async with cf.droplets.download_stream(guid) as response:
                async for chunk in response.aiter_bytes():
                    f.write(chunk)

        Соединение закрывается при выходе из блока.
        """
        request_path = path("/v3/droplets/%s/download", guid)
        logger.info(f"Client DOWNLOAD: streaming droplet bits from {request_path}")
        async with self.client.stream("GET", request_path, allowed_statuses=[200], follow_redirects=True) as response:
            yield response

    async def list_for_app(
        self, app_guid: str, opts: Optional[DropletAppListOptions] = None
    ) -> Tuple[List[Droplet], Pager]:
        if opts is None:
            opts = DropletAppListOptions()
        return await self._list_page(path("/v3/apps/%s/droplets", app_guid), opts, "list droplets for app")

    async def list_for_app_all(
        self, app_guid: str, opts: Optional[DropletAppListOptions] = None, *, max_pages: Optional[int] = None
    ) -> List[Droplet]:
        if opts is None:
            opts = DropletAppListOptions()
        return await auto_page(opts, lambda o: self.list_for_app(app_guid, o), max_pages=max_pages)

    async def list_for_package(
        self, package_guid: str, opts: Optional[DropletPackageListOptions] = None
    ) -> Tuple[List[Droplet], Pager]:
        if opts is None:
            opts = DropletPackageListOptions()
        return await self._list_page(
            path("/v3/packages/%s/droplets", package_guid), opts, "list droplets for package"
        )

    async def list_for_package_all(
        self, package_guid: str, opts: Optional[DropletPackageListOptions] = None, *, max_pages: Optional[int] = None
    ) -> List[Droplet]:
        if opts is None:
            opts = DropletPackageListOptions()
        return await auto_page(opts, lambda o: self.list_for_package(package_guid, o), max_pages=max_pages)

    async def get_current_association_for_app(self, app_guid: str) -> DropletCurrent:
        return await self.client.get(
            path("/v3/apps/%s/relationships/current_droplet", app_guid),
            DropletCurrent,
            "get current droplet association",
        )

    async def get_current_for_app(self, app_guid: str) -> Droplet:
        return await self.client.get(
            path("/v3/apps/%s/droplets/current", app_guid), Droplet, "get current droplet"
        )

    async def set_current_association_for_app(self, app_guid: str, droplet_guid: str) -> DropletCurrent:
        """Назначает droplet, с которым приложение будет запускаться."""
        logger.info(f"Client PATCH: setting current droplet of app {app_guid} to {droplet_guid}")
        return await self.client.patch(
            path("/v3/apps/%s/relationships/current_droplet", app_guid),
            ToOneRelationship.to(droplet_guid),
            DropletCurrent,
            "set current droplet association",
        )
