# cf_client/schemas/pagination.py

from typing import Generic, TypeVar, List, Optional
from pydantic import BaseModel, Field

from .common import Link

# Тип ресурса в списке resources
DataType = TypeVar("DataType")


class Pagination(BaseModel):
    """
    Блок пагинации, который сервер прикладывает к каждому ответу-списку.
    Отсутствие next - единственный признак того, что страниц больше нет.
    """

    total_results: int = Field(0, description="Общее количество записей в коллекции.")
    total_pages: int = Field(0, description="Общее количество страниц.")
    first: Optional[Link] = None
    last: Optional[Link] = None
    next: Optional[Link] = None
    previous: Optional[Link] = None


class ResourceList(BaseModel, Generic[DataType]):
    """
    Стандартная схема ответа для списков v3 API: pagination + resources.
    """

    pagination: Pagination
    resources: List[DataType] = Field(
        ..., description="Ресурсы страницы в порядке сервера."
    )
