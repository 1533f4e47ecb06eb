"""Plain text version file source."""

from typing import Optional

import httpx

from ..abort import AbortToken
from ..constants import KEY_VERSION, PLAIN_URL_TIMEOUT
from ..errors import NetworkError
from ..logging_config import get_logger
from ..models import ComponentId, Metadata
from ..utils import create_http_client, send_request
from .base import Request, VersionedSource

logger = get_logger(__name__)


class PlainVersionRequest(Request):
    """Fetch a URL whose whole body is the version string."""

    def __init__(
        self,
        url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = PLAIN_URL_TIMEOUT,
    ) -> None:
        self.url = url
        self._transport = transport
        self._timeout = timeout

    def create_client(self) -> httpx.AsyncClient:
        return create_http_client(
            transport=self._transport,
            timeout=self._timeout,
            headers={"Accept": "text/plain,*/*;q=0.8"},
        )

    async def run(self, abort: Optional[AbortToken] = None) -> Optional[Metadata]:
        async with self.create_client() as client:
            request = client.build_request("GET", self.url)
            response = await send_request(client, request, abort)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error fetching %s: %s", self.url, response.status_code)
            raise NetworkError(f"HTTP error {response.status_code} fetching {self.url}") from e

        info = Metadata()
        info[KEY_VERSION] = response.text
        logger.debug("Fetched version %r from %s", response.text, self.url)
        return info


class PlainSource(VersionedSource):
    """Component whose newest version is published as a text file."""

    def __init__(
        self,
        identifier: ComponentId,
        url: str,
        version: Optional[str],
        name: Optional[str] = None,
        module: Optional[str] = None,
        version_prefix: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(identifier, version, name, module, version_prefix)
        self.url = url
        self._transport = transport

    def create_request(self) -> Request:
        return PlainVersionRequest(self.url, transport=self._transport)
