# cf_client/schemas/__init__.py

from .common import Link, Metadata, Relationship, ToOneRelationship, CreatedBy, Resource
from .pagination import Pagination, ResourceList
from .build import Build, BuildCreate, BuildUpdate, Lifecycle
from .droplet import Droplet, DropletCreate, DropletUpdate, DropletCopy, DropletCurrent
from .package import (
    Package,
    PackageCreate,
    PackageUpdate,
    PackageCopy,
    DockerCredentials,
    DockerPackageData,
)

__all__ = [
    "Link",
    "Metadata",
    "Relationship",
    "ToOneRelationship",
    "CreatedBy",
    "Resource",
    "Pagination",
    "ResourceList",
    "Build",
    "BuildCreate",
    "BuildUpdate",
    "Lifecycle",
    "Droplet",
    "DropletCreate",
    "DropletUpdate",
    "DropletCopy",
    "DropletCurrent",
    "Package",
    "PackageCreate",
    "PackageUpdate",
    "PackageCopy",
    "DockerCredentials",
    "DockerPackageData",
]
