# cf_client/schemas/droplet.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .build import Lifecycle
from .common import Metadata, Relationship, Resource, ToOneRelationship


class DropletChecksum(BaseModel):
    type: str
    value: str


class DropletBuildpack(BaseModel):
    name: str
    detect_output: Optional[str] = None
    buildpack_name: Optional[str] = None
    version: Optional[str] = None


class Droplet(Resource):
    state: str
    error: Optional[str] = None
    lifecycle: Optional[Lifecycle] = None
    execution_metadata: Optional[str] = None
    process_types: Dict[str, str] = Field(default_factory=dict)
    checksum: Optional[DropletChecksum] = None
    buildpacks: List[DropletBuildpack] = Field(default_factory=list)
    stack: Optional[str] = None
    image: Optional[str] = None
    relationships: Dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Optional[Metadata] = None


class DropletCreate(BaseModel):
    """Создание droplet без пакета (для загрузки собственных битов)."""
    relationships: Dict[str, ToOneRelationship]
    process_types: Optional[Dict[str, str]] = None
    metadata: Optional[Metadata] = None

    @classmethod
    def for_app(cls, app_guid: str) -> "DropletCreate":
        return cls(relationships={"app": ToOneRelationship.to(app_guid)})


class DropletUpdate(BaseModel):
    metadata: Optional[Metadata] = Field(default_factory=Metadata)
    image: Optional[str] = None


class DropletCopy(BaseModel):
    relationships: Dict[str, ToOneRelationship]

    @classmethod
    def to_app(cls, app_guid: str) -> "DropletCopy":
        return cls(relationships={"app": ToOneRelationship.to(app_guid)})


class DropletCurrent(BaseModel):
    """Связь приложения с текущим droplet (relationships/current_droplet)."""
    data: Optional[Relationship] = None
    links: Dict[str, Any] = Field(default_factory=dict)
