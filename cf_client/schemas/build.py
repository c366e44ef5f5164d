# cf_client/schemas/build.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .common import CreatedBy, Metadata, Relationship, Resource, ToOneRelationship


class Lifecycle(BaseModel):
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


class Build(Resource):
    state: str
    staging_memory_in_mb: Optional[int] = None
    staging_disk_in_mb: Optional[int] = None
    staging_log_rate_limit_bytes_per_second: Optional[int] = None
    error: Optional[str] = None
    lifecycle: Optional[Lifecycle] = None
    package: Optional[Relationship] = None
    droplet: Optional[Relationship] = None
    created_by: Optional[CreatedBy] = None
    relationships: Dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Optional[Metadata] = None


class BuildCreate(BaseModel):
    package: Relationship
    lifecycle: Optional[Lifecycle] = None
    staging_memory_in_mb: Optional[int] = None
    staging_disk_in_mb: Optional[int] = None
    staging_log_rate_limit_bytes_per_second: Optional[int] = None
    metadata: Optional[Metadata] = None

    @classmethod
    def for_package(cls, package_guid: str) -> "BuildCreate":
        return cls(package=Relationship(guid=package_guid))


class BuildUpdate(BaseModel):
    metadata: Optional[Metadata] = Field(default_factory=Metadata)
    state: Optional[str] = None
    error: Optional[str] = None
