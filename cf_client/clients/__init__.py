# cf_client/clients/__init__.py

from .base import BaseHttpClient, path, with_query
from .resource import ResourceClient
from .builds import BuildClient, BuildListOptions, BuildAppListOptions
from .droplets import (
    DropletClient,
    DropletListOptions,
    DropletAppListOptions,
    DropletPackageListOptions,
)
from .packages import PackageClient, PackageListOptions, PackageAppListOptions

__all__ = [
    "BaseHttpClient",
    "path",
    "with_query",
    "ResourceClient",
    "BuildClient",
    "BuildListOptions",
    "BuildAppListOptions",
    "DropletClient",
    "DropletListOptions",
    "DropletAppListOptions",
    "DropletPackageListOptions",
    "PackageClient",
    "PackageListOptions",
    "PackageAppListOptions",
]
