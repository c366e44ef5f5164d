# cf_client/schemas/package.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .common import Metadata, Resource, ToOneRelationship


class DockerCredentials(BaseModel):
    username: str
    password: str


class DockerPackageData(BaseModel):
    image: str
    username: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def with_credentials(
        cls, image: str, credentials: Optional[DockerCredentials] = None
    ) -> "DockerPackageData":
        if credentials is None:
            return cls(image=image)
        return cls(image=image, username=credentials.username, password=credentials.password)


class Package(Resource):
    type: str
    state: str
    data: Dict[str, Any] = Field(default_factory=dict)
    relationships: Dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Optional[Metadata] = None


class PackageCreate(BaseModel):
    type: str = "bits"
    relationships: Dict[str, ToOneRelationship]
    data: Optional[Dict[str, Any]] = None
    metadata: Optional[Metadata] = None

    @classmethod
    def for_app(cls, app_guid: str, package_type: str = "bits") -> "PackageCreate":
        return cls(type=package_type, relationships={"app": ToOneRelationship.to(app_guid)})

    @classmethod
    def docker(
        cls,
        image: str,
        app_guid: str,
        credentials: Optional[DockerCredentials] = None,
    ) -> "PackageCreate":
        data = DockerPackageData.with_credentials(image, credentials)
        return cls(
            type="docker",
            relationships={"app": ToOneRelationship.to(app_guid)},
            data=data.model_dump(exclude_none=True),
        )


class PackageUpdate(BaseModel):
    metadata: Optional[Metadata] = Field(default_factory=Metadata)
    username: Optional[str] = None
    password: Optional[str] = None


class PackageCopy(BaseModel):
    relationships: Dict[str, ToOneRelationship]

    @classmethod
    def to_app(cls, app_guid: str) -> "PackageCopy":
        return cls(relationships={"app": ToOneRelationship.to(app_guid)})
