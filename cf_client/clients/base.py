# cf_client/clients/base.py
import logging
import httpx
from contextlib import asynccontextmanager
from typing import Type, TypeVar, List, Optional, Any, AsyncIterator, Dict, Iterable, Tuple, Union
from urllib.parse import quote
from pydantic import BaseModel as PydanticBaseModel, ValidationError

from cf_client.exceptions import ServiceCommunicationError, ResponseDecodeError
from cf_client.filters.base import ListOptions
from cf_client.pagination.pager import Pager
from cf_client.schemas.pagination import ResourceList

logger = logging.getLogger("cf_client.clients.base")

ModelType_client = TypeVar("ModelType_client", bound=PydanticBaseModel)

DEFAULT_TIMEOUT = 10.0


def path(template: str, *args: Any) -> str:
    """Подставляет аргументы в шаблон пути, экранируя их как сегменты URL."""
    return template % tuple(quote(str(a), safe="") for a in args)


def with_query(base_path: str, opts: Optional[ListOptions]) -> str:
    if opts is None:
        return base_path
    query = opts.to_query_string()
    return f"{base_path}?{query}" if query else base_path


class BaseHttpClient:
    """
    Базовый HTTP-клиент для v3 API.

    Владеет httpx.AsyncClient, если он не передан извне. Все обращения к сети
    проходят через request - единственную точку, где ошибки транспорта и
    неожиданные статусы превращаются в ServiceCommunicationError.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Union[float, httpx.Timeout] = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        verify: bool = True,
    ):
        self.base_url_str = str(base_url).rstrip("/")
        self.auth_token = auth_token
        self.user_agent = user_agent

        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout, verify=verify, follow_redirects=True
        )
        self._owns_client = http_client is None
        logger.debug(f"BaseHttpClient initialized for API base: {self.base_url_str}. Owns client: {self._owns_client}")

    def _get_auth_headers(self) -> Dict[str, str]:
        if self.auth_token:
            prefix = "Bearer "
            if self.auth_token.lower().startswith(prefix.lower()):
                return {"Authorization": self.auth_token}
            return {"Authorization": f"{prefix}{self.auth_token}"}
        return {}

    def _url(self, request_path: str) -> str:
        return f"{self.base_url_str}/{request_path.lstrip('/')}"

    async def request(
        self,
        method: str,
        request_path: str,
        allowed_statuses: Optional[Iterable[int]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        url = self._url(request_path)
        headers = self._get_auth_headers()
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        headers.update(kwargs.pop("headers", {}))
        if "json" in kwargs and "Content-Type" not in headers:
            headers["Content-Type"] = "application/json"
        logger.debug(f"Executing remote call: {method} {url}, Data: {kwargs.get('json')}")
        effective_allowed_statuses = list(allowed_statuses) if allowed_statuses is not None else [200, 201, 202, 204]
        try:
            response = await self._http_client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise ServiceCommunicationError(f"Timeout error accessing {request_path}: {e!s}", url=request_path) from e
        except httpx.RequestError as e:
            raise ServiceCommunicationError(f"Network error accessing {request_path}: {e!s}", url=request_path) from e

        if response.status_code not in effective_allowed_statuses:
            logger.warning(
                f"Remote call {method} {request_path} returned unexpected status: {response.status_code}. "
                f"Allowed: {effective_allowed_statuses}. Response text: {response.text[:500]}"
            )
            detail_message, errors = _extract_error_details(response)
            raise ServiceCommunicationError(
                message=f"Error {method} {request_path}: {detail_message}",
                status_code=response.status_code,
                url=request_path,
                errors=errors,
            )
        logger.debug(f"Remote call to {request_path} successful. Status: {response.status_code}")
        return response

    @asynccontextmanager
    async def stream(
        self,
        method: str,
        request_path: str,
        allowed_statuses: Optional[Iterable[int]] = None,
        **kwargs: Any,
    ) -> AsyncIterator[httpx.Response]:
        """
        Как request, но тело ответа не читается целиком: вызывающий код
        итерирует response.aiter_bytes() внутри блока async with.
        """
        url = self._url(request_path)
        headers = self._get_auth_headers()
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        headers.update(kwargs.pop("headers", {}))
        logger.debug(f"Executing streamed remote call: {method} {url}")
        effective_allowed_statuses = list(allowed_statuses) if allowed_statuses is not None else [200]
        try:
            async with self._http_client.stream(method, url, headers=headers, **kwargs) as response:
                if response.status_code not in effective_allowed_statuses:
                    await response.aread()
                    logger.warning(
                        f"Streamed call {method} {request_path} returned unexpected status: {response.status_code}. "
                        f"Allowed: {effective_allowed_statuses}"
                    )
                    detail_message, errors = _extract_error_details(response)
                    raise ServiceCommunicationError(
                        message=f"Error {method} {request_path}: {detail_message}",
                        status_code=response.status_code,
                        url=request_path,
                        errors=errors,
                    )
                yield response
        except httpx.TimeoutException as e:
            raise ServiceCommunicationError(f"Timeout error accessing {request_path}: {e!s}", url=request_path) from e
        except httpx.RequestError as e:
            raise ServiceCommunicationError(f"Network error accessing {request_path}: {e!s}", url=request_path) from e

    def _decode(
        self,
        response: httpx.Response,
        model_cls: Type[ModelType_client],
        operation: str,
        request_path: str,
    ) -> ModelType_client:
        try:
            return model_cls.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Failed to decode response for {operation}: {e}")
            raise ResponseDecodeError(operation, str(e), url=request_path) from e

    async def get(self, request_path: str, model_cls: Type[ModelType_client], operation: str) -> ModelType_client:
        response = await self.request("GET", request_path, allowed_statuses=[200])
        return self._decode(response, model_cls, operation, request_path)

    async def post(
        self,
        request_path: str,
        body: Optional[PydanticBaseModel],
        model_cls: Type[ModelType_client],
        operation: str,
    ) -> ModelType_client:
        kwargs: Dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = _dump_request(body)
        response = await self.request("POST", request_path, allowed_statuses=[200, 201, 202], **kwargs)
        return self._decode(response, model_cls, operation, request_path)

    async def patch(
        self,
        request_path: str,
        body: PydanticBaseModel,
        model_cls: Type[ModelType_client],
        operation: str,
    ) -> ModelType_client:
        response = await self.request(
            "PATCH", request_path, allowed_statuses=[200, 202], json=_dump_request(body)
        )
        return self._decode(response, model_cls, operation, request_path)

    async def delete(self, request_path: str) -> Optional[str]:
        """Удаляет ресурс. Возвращает URL асинхронной задачи (Location), если сервер его вернул."""
        response = await self.request("DELETE", request_path, allowed_statuses=[202, 204])
        return response.headers.get("Location")

    async def get_page(
        self,
        request_path: str,
        model_cls: Type[ModelType_client],
        operation: str,
    ) -> Tuple[List[ModelType_client], Pager]:
        response = await self.request("GET", request_path, allowed_statuses=[200])
        page = self._decode(response, ResourceList[model_cls], operation, request_path)
        return page.resources, Pager(page.pagination)

    async def close(self) -> None:
        if self._owns_client and self._http_client:
            logger.info(f"Closing owned HTTP client for {self.base_url_str}")
            await self._http_client.aclose()
        elif not self._owns_client:
            logger.debug(f"HTTP client for {self.base_url_str} is managed externally, not closing.")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _dump_request(body: PydanticBaseModel) -> Dict[str, Any]:
    return body.model_dump(mode="json", exclude_none=True)


def _extract_error_details(response: httpx.Response) -> Tuple[str, List[Dict[str, Any]]]:
    """Достает описание ошибки из тела ответа CF API: {"errors": [{"code", "title", "detail"}]}."""
    detail_message = response.text or response.reason_phrase
    try:
        error_json = response.json()
    except ValueError:
        return detail_message, []
    if isinstance(error_json, dict):
        errors = error_json.get("errors")
        if isinstance(errors, list) and errors:
            details = [str(err.get("detail") or err.get("title")) for err in errors if isinstance(err, dict)]
            if details:
                detail_message = "; ".join(details)
            return detail_message, [err for err in errors if isinstance(err, dict)]
        if "detail" in error_json:
            detail_message = str(error_json["detail"])
    return detail_message, []
