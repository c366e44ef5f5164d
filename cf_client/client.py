# cf_client/client.py
import logging
from typing import Optional, Union

import httpx

from cf_client.clients.base import BaseHttpClient, DEFAULT_TIMEOUT
from cf_client.clients.builds import BuildClient
from cf_client.clients.droplets import DropletClient
from cf_client.clients.packages import PackageClient
from cf_client.config import ClientSettings
from cf_client.exceptions import ConfigurationError
from cf_client.logging_config import setup_sdk_logging

logger = logging.getLogger("cf_client.client")


class CFClient:
    """
    Точка входа: клиенты ресурсов поверх одного общего HTTP-клиента.

        async with CFClient("https://api.example.com", auth_token="...") as cf:
            builds = await cf.builds.list_all()
    """

    def __init__(
        self,
        api_url: str,
        auth_token: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Union[float, httpx.Timeout] = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        verify: bool = True,
    ):
        if not api_url:
            raise ConfigurationError("api_url must not be empty")
        self.http = BaseHttpClient(
            base_url=api_url,
            auth_token=auth_token,
            http_client=http_client,
            timeout=timeout,
            user_agent=user_agent,
            verify=verify,
        )
        self.builds = BuildClient(self.http)
        self.droplets = DropletClient(self.http)
        self.packages = PackageClient(self.http)
        logger.info(f"CFClient initialized for {self.http.base_url_str}")

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, http_client: Optional[httpx.AsyncClient] = None
    ) -> "CFClient":
        setup_sdk_logging(settings.LOGGING_LEVEL)
        return cls(
            api_url=settings.API_URL,
            auth_token=settings.AUTH_TOKEN,
            http_client=http_client,
            timeout=httpx.Timeout(settings.REQUEST_TIMEOUT, connect=settings.CONNECT_TIMEOUT),
            user_agent=settings.USER_AGENT,
            verify=settings.VERIFY_SSL,
        )

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "CFClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
