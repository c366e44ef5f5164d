# cf_client/exceptions.py
from typing import Any, Dict, List, Optional


class CFClientError(Exception):
    """
    Базовый класс для всех исключений, возникающих в cf_client.
    Позволяет ловить все ошибки клиента одним блоком except CFClientError.
    """

    pass


class ConfigurationError(CFClientError):
    """
    Исключение, возникающее при ошибках конфигурации клиента.
    Например, если не задан API_URL или передан некорректный таймаут.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"Configuration Error: {self.message}"


class ServiceCommunicationError(CFClientError):
    """
    Ошибка обмена с API.

    Покрывает два случая:
    - транспортная ошибка (сеть, таймаут) - status_code равен None;
    - ответ со статусом вне допустимого набора для операции - status_code задан,
      а errors содержит массив ошибок CF API из тела ответа, если он был.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        :param message: Основное сообщение об ошибке.
        :param status_code: HTTP статус-код ответа, если ответ был получен.
        :param url: URL (путь), при обращении к которому произошла ошибка.
        :param errors: Список ошибок из тела ответа ({"code", "title", "detail"}).
        """
        self.message = message
        self.status_code = status_code
        self.url = url
        self.errors = errors or []
        full_message = "Service Communication Error"
        if self.url:
            full_message += f" accessing {self.url}"
        if self.status_code:
            full_message += f" (Status Code: {self.status_code})"
        full_message += f": {self.message}"
        super().__init__(full_message)

    @property
    def is_transport_error(self) -> bool:
        return self.status_code is None

    def has_error_code(self, title: str) -> bool:
        """Проверяет, вернул ли сервер ошибку с указанным title (например, CF-ResourceNotFound)."""
        return any(err.get("title") == title for err in self.errors)


class ResponseDecodeError(CFClientError):
    """
    Тело ответа не соответствует ожидаемой JSON-структуре.
    operation указывает, какая операция не смогла разобрать ответ.
    """

    def __init__(self, operation: str, message: str, url: Optional[str] = None):
        self.operation = operation
        self.message = message
        self.url = url
        full_message = f"Error decoding response for {operation}"
        if self.url:
            full_message += f" from {self.url}"
        full_message += f": {self.message}"
        super().__init__(full_message)


class PaginationLimitError(CFClientError):
    """
    Автопагинация превысила явно заданный лимит страниц (max_pages).
    Возникает только если лимит передан вызывающим кодом.
    """

    def __init__(self, max_pages: int, fetched: int):
        self.max_pages = max_pages
        self.fetched = fetched
        super().__init__(
            f"Pagination limit exceeded: server still reports a next page after {fetched} pages (max_pages={max_pages})"
        )
