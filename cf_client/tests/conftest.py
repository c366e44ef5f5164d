# cf_client/tests/conftest.py
import itertools
import logging
import uuid
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from cf_client.client import CFClient

logger = logging.getLogger("cf_client.tests.conftest")

API_URL = "https://api.example.org"
AUTH_TOKEN = "foobar"


# --- Генератор JSON-ответов API ---


class ObjectJSONGenerator:
    """Выдает правдоподобные JSON-объекты ресурсов v3 API и постраничные ответы."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def _base(self, guid: Optional[str], collection: str) -> Dict[str, Any]:
        day = next(self._counter) % 28 + 1
        guid = guid or str(uuid.uuid4())
        return {
            "guid": guid,
            "created_at": f"2023-01-{day:02d}T10:00:00Z",
            "updated_at": f"2023-01-{day:02d}T10:05:00Z",
            "links": {"self": {"href": f"{API_URL}/v3/{collection}/{guid}"}},
            "metadata": {"labels": {}, "annotations": {}},
        }

    def build(self, guid: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
        data = self._base(guid, "builds")
        data.update(
            {
                "state": "STAGED",
                "staging_memory_in_mb": 1024,
                "staging_disk_in_mb": 1024,
                "staging_log_rate_limit_bytes_per_second": -1,
                "error": None,
                "lifecycle": {"type": "buildpack", "data": {"buildpacks": ["ruby_buildpack"], "stack": "cflinuxfs4"}},
                "package": {"guid": "993386e8-5f68-403c-b372-d4aba7c71dbc"},
                "droplet": {"guid": str(uuid.uuid4())},
                "created_by": {"guid": str(uuid.uuid4()), "name": "bill", "email": "bill@example.com"},
                "relationships": {"app": {"data": {"guid": "1cb006ee-fb05-47e1-b541-c34179ddc446"}}},
            }
        )
        data.update(overrides)
        return data

    def droplet(self, guid: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
        data = self._base(guid, "droplets")
        data.update(
            {
                "state": "STAGED",
                "error": None,
                "lifecycle": {"type": "buildpack", "data": {}},
                "execution_metadata": "",
                "process_types": {"web": "bundle exec rackup config.ru -p $PORT"},
                "checksum": {"type": "sha256", "value": "3e6d9d9f8f1c5b2a"},
                "buildpacks": [{"name": "ruby_buildpack", "detect_output": "ruby 1.6.14", "version": "1.1.1"}],
                "stack": "cflinuxfs4",
                "image": None,
                "relationships": {"app": {"data": {"guid": "1cb006ee-fb05-47e1-b541-c34179ddc446"}}},
            }
        )
        data.update(overrides)
        return data

    def package(self, guid: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
        data = self._base(guid, "packages")
        data.update(
            {
                "type": "bits",
                "state": "READY",
                "data": {"checksum": {"type": "sha256", "value": None}, "error": None},
                "relationships": {"app": {"data": {"guid": "1cb006ee-fb05-47e1-b541-c34179ddc446"}}},
            }
        )
        data.update(overrides)
        return data

    @staticmethod
    def paged(base_path: str, *pages: List[Dict[str, Any]], per_page: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Превращает списки ресурсов в тела ответов со ссылками first/last/next/previous.
        per_page по умолчанию - размер первой страницы.
        """
        total_pages = len(pages)
        size = per_page or (len(pages[0]) if pages and pages[0] else 1)
        total_results = sum(len(p) for p in pages)

        def link(page_number: int) -> Dict[str, str]:
            return {"href": f"{API_URL}{base_path}?page={page_number}&per_page={size}"}

        bodies = []
        for index, resources in enumerate(pages, start=1):
            bodies.append(
                {
                    "pagination": {
                        "total_results": total_results,
                        "total_pages": total_pages,
                        "first": link(1),
                        "last": link(total_pages),
                        "next": link(index + 1) if index < total_pages else None,
                        "previous": link(index - 1) if index > 1 else None,
                    },
                    "resources": resources,
                }
            )
        return bodies


def json_responses(bodies: List[Dict[str, Any]]) -> List[httpx.Response]:
    return [httpx.Response(200, json=body) for body in bodies]


# --- Фикстуры ---


@pytest.fixture
def g() -> ObjectJSONGenerator:
    return ObjectJSONGenerator()


@pytest_asyncio.fixture
async def http_client() -> httpx.AsyncClient:
    """httpx.AsyncClient, управляемый контекстным менеджером."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def cf(http_client: httpx.AsyncClient) -> CFClient:
    return CFClient(API_URL, auth_token=AUTH_TOKEN, http_client=http_client)
