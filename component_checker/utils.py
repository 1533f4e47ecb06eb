"""HTTP helpers shared by the update requests."""

from typing import Optional

import httpx

from .abort import AbortToken, guarded
from .constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from .errors import NetworkError
from .logging_config import get_logger

logger = get_logger(__name__)


def create_http_client(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    headers: Optional[dict[str, str]] = None,
) -> httpx.AsyncClient:
    """Create an HTTP client for update requests.

    Args:
        transport: Optional transport (tests pass an httpx.MockTransport).
        timeout: Request timeout in seconds.
        headers: Extra default headers.

    Returns:
        A new AsyncClient; the caller is responsible for closing it.
    """
    default_headers = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        default_headers.update(headers)

    return httpx.AsyncClient(
        transport=transport,
        timeout=timeout,
        headers=default_headers,
        follow_redirects=True,
        max_redirects=10,
    )


def format_status_line(response: httpx.Response) -> str:
    """Render the status line of a response, e.g. "HTTP/1.1 404 Not Found"."""
    reason = response.reason_phrase
    line = f"{response.http_version} {response.status_code}"
    return f"{line} {reason}" if reason else line


async def send_request(
    client: httpx.AsyncClient,
    request: httpx.Request,
    abort: Optional[AbortToken] = None,
) -> httpx.Response:
    """Send a request and read the whole body.

    Raises:
        NetworkError: On any transport failure.
        Cancelled: If ``abort`` fires while waiting.
    """
    try:
        return await guarded(abort, client.send(request))
    except httpx.HTTPError as e:
        logger.debug("Transport error for %s: %s", request.url, e)
        raise NetworkError(f"{request.url}: {e}") from e
