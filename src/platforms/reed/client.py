"""Reed jobs API client over httpx.

Hard rules:
  - Basic auth: API key as username, empty password
  - One request per call, no retries (cache sits above this layer)
  - Non-2xx responses raise httpx.HTTPStatusError
"""

import logging
from types import TracebackType
from typing import Any

import httpx

from src.core.config import ApiConfig
from src.core.schemas import RequestDescriptor
from src.platforms.base import JobBoardClient

logger = logging.getLogger(__name__)

USER_AGENT = "jobs-market-scan/0.1"


class ReedClient(JobBoardClient):
    """Async context manager that owns one httpx.AsyncClient.

    Usage::

        async with ReedClient(config, api_key) as client:
            data = await client.get_json(descriptor)

    ``transport`` is for tests (e.g. httpx.MockTransport).
    """

    def __init__(
        self,
        config: ApiConfig,
        api_key: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._api_key = api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def platform_id(self) -> str:
        return "reed"

    async def __aenter__(self) -> "ReedClient":
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            auth=httpx.BasicAuth(self._api_key, ""),
            headers={"User-Agent": USER_AGENT},
            timeout=self._config.timeout_s,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_json(self, descriptor: RequestDescriptor) -> Any:
        if self._client is None:
            msg = "ReedClient not entered, use 'async with'"
            raise RuntimeError(msg)

        logger.info("Starting request %s %s", descriptor.path, descriptor.params)
        resp = await self._client.get(descriptor.path, params=descriptor.params)
        resp.raise_for_status()
        return resp.json()
