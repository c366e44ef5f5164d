# cf_client/schemas/common.py
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    href: str = ""
    method: Optional[str] = None


class Metadata(BaseModel):
    """
    Метки и аннотации ресурса. Значение None у ключа в update-запросе удаляет метку.
    """
    labels: Dict[str, Optional[str]] = Field(default_factory=dict)
    annotations: Dict[str, Optional[str]] = Field(default_factory=dict)


class Relationship(BaseModel):
    guid: str


class ToOneRelationship(BaseModel):
    data: Optional[Relationship] = None

    @classmethod
    def to(cls, guid: str) -> "ToOneRelationship":
        return cls(data=Relationship(guid=guid))


class CreatedBy(BaseModel):
    guid: str
    name: Optional[str] = None
    email: Optional[str] = None


class Resource(BaseModel):
    """
    Общие поля всех ресурсов v3 API.
    Неизвестные поля сохраняются (extra="allow"), чтобы ответ сервера не терял данные.
    """
    guid: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Dict[str, Link] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")
