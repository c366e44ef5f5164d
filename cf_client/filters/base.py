# cf_client/filters/base.py

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

logger = logging.getLogger(__name__) # Имя будет cf_client.filters.base

# Ключ в json_schema_extra, под которым хранится описание кодирования поля
FILTER_META_KEY = "cf_filter"

PAGE_FIELD = "page"
PER_PAGE_FIELD = "per_page"
MAX_PER_PAGE = 5000

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def filter_field(
    wire_name: Optional[str] = None,
    *,
    required: bool = False,
    default: Any = None,
    **kwargs: Any,
) -> Any:
    """
    Объявляет поле опций списка как параметр строки запроса.

    :param wire_name: Имя параметра в запросе. По умолчанию - имя поля.
    :param required: Если True, параметр выводится даже с пустым значением (`key=`).
    :param default: Значение по умолчанию (игнорируется при default_factory).
    :param kwargs: Остальные аргументы pydantic.Field (ge, le, description, default_factory...).
    """
    extra = {FILTER_META_KEY: {"name": wire_name, "required": required}}
    if "default_factory" in kwargs:
        return Field(json_schema_extra=extra, **kwargs)
    return Field(default=default, json_schema_extra=extra, **kwargs)


def _filter_meta(field_info: FieldInfo) -> Optional[Dict[str, Any]]:
    extra = field_info.json_schema_extra
    if not isinstance(extra, dict):
        return None
    meta = extra.get(FILTER_META_KEY)
    return meta if isinstance(meta, dict) else None


def format_timestamp(value: datetime) -> str:
    """RFC3339 в UTC. Наивные datetime считаются UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def render_filter_value(value: Any) -> Optional[str]:
    """
    Превращает значение фильтра в строку для query string.
    Пустые значения (None, "", [], 0) дают None или "" - такие параметры опускаются.
    """
    if value is None:
        return None
    # bool проверяем раньше int: bool - подкласс int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return render_filter_value(value.value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        parts = [render_filter_value(v) for v in items]
        return ",".join(p for p in parts if p)
    if isinstance(value, int):
        return str(value) if value != 0 else ""
    return str(value)


class RelationalOperator(str, Enum):
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"


class TimestampFilter(BaseModel):
    """
    Фильтр по времени (created_ats / updated_ats).

    Без оператора - точное совпадение с любым из timestamps (`created_ats=t1,t2`),
    с оператором - сравнение (`created_ats[gt]=t1`).
    """
    timestamps: List[datetime] = Field(default_factory=list)
    operator: Optional[RelationalOperator] = None

    def query_key(self, wire_name: str) -> str:
        if self.operator is None:
            return wire_name
        return f"{wire_name}[{self.operator.value}]"

    def query_value(self) -> str:
        return render_filter_value(self.timestamps) or ""


class ListOptions(BaseModel):
    """
    Базовые опции списка: пагинация, сортировка и общие фильтры CF API.

    Экземпляр принадлежит одному обходу коллекции: Pager изменяет page/per_page
    на месте между запросами страниц, поэтому один объект опций нельзя
    использовать в нескольких одновременных обходах.
    """
    model_config = ConfigDict(populate_by_name=True)

    page: Optional[int] = filter_field(PAGE_FIELD, ge=1, description="Номер страницы, начиная с 1.")
    per_page: Optional[int] = filter_field(
        PER_PAGE_FIELD, ge=1, le=MAX_PER_PAGE, description="Размер страницы."
    )
    order_by: Optional[str] = filter_field(
        "order_by", description="Поле сортировки, '-' в начале - по убыванию (например '-created_at')."
    )
    label_selector: Optional[str] = filter_field("label_selector")
    created_ats: Optional[TimestampFilter] = filter_field("created_ats")
    updated_ats: Optional[TimestampFilter] = filter_field("updated_ats")

    def to_query_params(self) -> List[Tuple[str, str]]:
        return encode_query_params(self)

    def to_query_string(self) -> str:
        return encode_query(self)


def encode_query_params(options: BaseModel) -> List[Tuple[str, str]]:
    """
    Собирает пары (ключ, значение) из всех полей, объявленных через filter_field.
    Порядок - по ключу, поэтому результат детерминирован.
    """
    params: Dict[str, str] = {}
    for name, field_info in type(options).model_fields.items():
        meta = _filter_meta(field_info)
        if meta is None:
            continue
        wire_name = meta.get("name") or field_info.alias or name
        value = getattr(options, name)

        if isinstance(value, TimestampFilter):
            key = value.query_key(wire_name)
            rendered: Optional[str] = value.query_value()
        else:
            key = wire_name
            rendered = render_filter_value(value)

        if not rendered:
            if meta.get("required"):
                params[key] = ""
            continue
        params[key] = rendered
    return sorted(params.items())


def encode_query(options: BaseModel) -> str:
    """Каноническая query string: отсортированные ключи, списки через запятую."""
    query = urlencode(encode_query_params(options), safe=",")
    logger.debug(f"Encoded {type(options).__name__} to query string: '{query}'")
    return query
