# cf_client/clients/packages.py
import logging
from typing import List, Optional, Tuple

from cf_client.filters.base import ListOptions, filter_field
from cf_client.pagination.auto_pager import auto_page
from cf_client.pagination.pager import Pager
from cf_client.schemas.package import (
    DockerCredentials,
    Package,
    PackageCopy,
    PackageCreate,
    PackageUpdate,
)
from .base import path
from .resource import ResourceClient

logger = logging.getLogger("cf_client.clients.packages")


class PackageListOptions(ListOptions):
    guids: List[str] = filter_field("guids", default_factory=list)
    states: List[str] = filter_field("states", default_factory=list)
    types: List[str] = filter_field("types", default_factory=list)
    app_guids: List[str] = filter_field("app_guids", default_factory=list)
    space_guids: List[str] = filter_field("space_guids", default_factory=list)
    organization_guids: List[str] = filter_field("organization_guids", default_factory=list)


class PackageAppListOptions(ListOptions):
    states: List[str] = filter_field("states", default_factory=list)
    types: List[str] = filter_field("types", default_factory=list)


class PackageClient(ResourceClient[Package, PackageCreate, PackageUpdate, PackageListOptions]):
    collection_path = "/v3/packages"
    resource_cls = Package
    options_cls = PackageListOptions

    async def create_docker(
        self,
        image: str,
        app_guid: str,
        credentials: Optional[DockerCredentials] = None,
    ) -> Package:
        """Создает docker-пакет для приложения (образ и, опционально, учетные данные реестра)."""
        return await self.create(PackageCreate.docker(image, app_guid, credentials))

    async def copy(self, package_guid: str, app_guid: str) -> Package:
        """Копирует пакет одного приложения и привязывает копию к другому приложению."""
        logger.info(f"Client COPY: copying package {package_guid} to app {app_guid}")
        return await self.client.post(
            path("/v3/packages?source_guid=%s", package_guid),
            PackageCopy.to_app(app_guid),
            Package,
            "copy package",
        )

    async def list_for_app(
        self, app_guid: str, opts: Optional[PackageAppListOptions] = None
    ) -> Tuple[List[Package], Pager]:
        if opts is None:
            opts = PackageAppListOptions()
        return await self._list_page(path("/v3/apps/%s/packages", app_guid), opts, "list packages for app")

    async def list_for_app_all(
        self, app_guid: str, opts: Optional[PackageAppListOptions] = None, *, max_pages: Optional[int] = None
    ) -> List[Package]:
        if opts is None:
            opts = PackageAppListOptions()
        return await auto_page(opts, lambda o: self.list_for_app(app_guid, o), max_pages=max_pages)
