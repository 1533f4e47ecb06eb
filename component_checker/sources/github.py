"""GitHub releases source."""

import fnmatch
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ..abort import AbortToken
from ..constants import (
    GITHUB_ACCEPT,
    GITHUB_API_BASE,
    GITHUB_TIMEOUT,
    KEY_ASSET,
    KEY_DOWNLOAD_PAGE,
    KEY_DOWNLOAD_URL,
    KEY_RELEASE,
    KEY_VERSION,
)
from ..errors import MalformedResponse, RemoteError, SchemaError
from ..logging_config import get_logger
from ..models import ComponentId, Metadata
from ..utils import create_http_client, format_status_line, send_request
from .base import Request, VersionedSource

logger = get_logger(__name__)


class Authorizer(ABC):
    """Decorates outgoing GitHub requests, e.g. with credentials."""

    @abstractmethod
    async def authorize(
        self,
        url: str,
        request: httpx.Request,
        abort: Optional[AbortToken] = None,
    ) -> None:
        """Modify ``request`` in place before it is sent.

        Any exception raised here aborts the fetch unchanged.
        """
        pass


class TokenAuthorizer(Authorizer):
    """Attach a GitHub API token as a bearer credential."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def authorize(
        self,
        url: str,
        request: httpx.Request,
        abort: Optional[AbortToken] = None,
    ) -> None:
        request.headers["Authorization"] = f"Bearer {self._token}"


@dataclass
class GitHubConf:
    """Where to look for releases and which ones to accept.

    Subclasses may override ``is_acceptable_release`` and
    ``is_acceptable_asset`` for anything the flags cannot express.
    """

    owner: Optional[str] = None
    repo: Optional[str] = None
    api_base: str = GITHUB_API_BASE
    include_prereleases: bool = True
    include_drafts: bool = True
    asset_pattern: Optional[str] = None
    authorizers: list[Authorizer] = field(default_factory=list)
    transport: Optional[httpx.AsyncBaseTransport] = None
    timeout: float = GITHUB_TIMEOUT

    def get_owner(self) -> str:
        if not self.owner:
            raise ValueError("GitHub owner is not configured")
        return self.owner

    def get_repo(self) -> str:
        if not self.repo:
            raise ValueError("GitHub repo is not configured")
        return self.repo

    def releases_url(self, latest: bool = False) -> str:
        url = f"{self.api_base.rstrip('/')}/repos/{self.get_owner()}/{self.get_repo()}/releases"
        return f"{url}/latest" if latest else url

    def create_client(self) -> httpx.AsyncClient:
        return create_http_client(
            transport=self.transport,
            timeout=self.timeout,
            headers={"Accept": GITHUB_ACCEPT},
        )

    async def create_request(
        self,
        client: httpx.AsyncClient,
        url: str,
        abort: Optional[AbortToken] = None,
    ) -> httpx.Request:
        """Build the GET request and run it through every authorizer in order."""
        request = client.build_request("GET", url)
        for authorizer in self.authorizers:
            await authorizer.authorize(url, request, abort)
        return request

    def is_acceptable_release(self, release: Any) -> bool:
        if not isinstance(release, dict):
            return True
        if not self.include_prereleases and release.get("prerelease") is True:
            return False
        if not self.include_drafts and release.get("draft") is True:
            return False
        return True

    def is_acceptable_asset(self, asset: Any) -> bool:
        if self.asset_pattern is None or not isinstance(asset, dict):
            return False
        name = asset.get("name")
        return isinstance(name, str) and fnmatch.fnmatchcase(name, self.asset_pattern)


def _dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _remote_error(response: httpx.Response) -> RemoteError:
    status_line = format_status_line(response)
    try:
        payload = json.loads(response.content)
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return RemoteError(payload["message"], status_line)
    return RemoteError(f"unexpected response; HTTP status: {status_line}", status_line)


async def fetch_json(conf: GitHubConf, url: str, abort: Optional[AbortToken] = None) -> Any:
    """GET ``url`` from the GitHub API and decode the JSON body.

    Raises:
        NetworkError: On transport failure.
        RemoteError: If the status is not 200.
        MalformedResponse: If a 200 body is not valid JSON.
    """
    async with conf.create_client() as client:
        request = await conf.create_request(client, url, abort)
        response = await send_request(client, request, abort)

    if response.status_code != 200:
        error = _remote_error(response)
        logger.error("GitHub API error for %s: %s", url, error)
        raise error

    try:
        text = response.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedResponse(f"error({e.start}): {e.reason}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        offset = len(text[:e.pos].encode("utf-8"))
        raise MalformedResponse(f"error({offset}): {e.msg}") from e


def process_release(release: Any, conf: GitHubConf) -> Metadata:
    """Extract metadata from one accepted release object.

    Only the first asset accepted by ``conf`` is looked at.

    Raises:
        SchemaError: If required release fields are missing.
    """
    if not isinstance(release, dict):
        raise SchemaError("unexpected JSON schema: release is not an object")

    tag_name = release.get("tag_name")
    if not isinstance(tag_name, str):
        raise SchemaError("unexpected JSON schema: release has no string 'tag_name'")

    html_url = release.get("html_url")
    if not isinstance(html_url, str):
        raise SchemaError("unexpected JSON schema: release has no string 'html_url'")

    info = Metadata()
    info[KEY_VERSION] = tag_name
    info[KEY_DOWNLOAD_PAGE] = html_url
    info[KEY_RELEASE] = _dump_json(release)

    assets = release.get("assets")
    if isinstance(assets, list):
        for asset in assets:
            if not conf.is_acceptable_asset(asset):
                continue
            info[KEY_ASSET] = _dump_json(asset)
            if isinstance(asset, dict) and isinstance(asset.get("browser_download_url"), str):
                info[KEY_DOWNLOAD_URL] = asset["browser_download_url"]
            break

    return info


class GitHubReleasesRequest(Request):
    """Pick the first acceptable release from the full releases list.

    GitHub lists releases newest first, so the first acceptable one is the
    latest acceptable one.
    """

    def __init__(self, conf: GitHubConf) -> None:
        self.conf = conf

    async def run(self, abort: Optional[AbortToken] = None) -> Optional[Metadata]:
        data = await fetch_json(self.conf, self.conf.releases_url(), abort)
        if not isinstance(data, list):
            raise SchemaError("unexpected JSON schema: releases is not an array")

        for release in data:
            if self.conf.is_acceptable_release(release):
                return process_release(release, self.conf)

        logger.info("No acceptable release found for %s/%s", self.conf.owner, self.conf.repo)
        return None


class GitHubLatestReleaseRequest(Request):
    """Use GitHub's "latest release" endpoint."""

    def __init__(self, conf: GitHubConf) -> None:
        self.conf = conf

    async def run(self, abort: Optional[AbortToken] = None) -> Optional[Metadata]:
        data = await fetch_json(self.conf, self.conf.releases_url(latest=True), abort)
        if not isinstance(data, dict):
            raise SchemaError("unexpected JSON schema: latest release is not an object")

        if self.conf.is_acceptable_release(data):
            return process_release(data, self.conf)

        logger.info("Latest release of %s/%s is not acceptable", self.conf.owner, self.conf.repo)
        return None


class GitHubSource(VersionedSource):
    """Component released on GitHub."""

    def __init__(
        self,
        identifier: ComponentId,
        conf: GitHubConf,
        version: Optional[str],
        name: Optional[str] = None,
        module: Optional[str] = None,
        version_prefix: Optional[str] = None,
        latest_only: bool = False,
    ) -> None:
        super().__init__(identifier, version, name, module, version_prefix)
        self.conf = conf
        self.latest_only = latest_only

    def create_request(self) -> Request:
        if self.latest_only:
            return GitHubLatestReleaseRequest(self.conf)
        return GitHubReleasesRequest(self.conf)
