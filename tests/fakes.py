"""Fakes shared by the test suite."""

import asyncio
import json
import uuid
from typing import Any, Callable, Optional, Union

import httpx

from component_checker.abort import AbortToken, guarded
from component_checker.cache import UpdateListener
from component_checker.models import ComponentId, Metadata
from component_checker.sources import Request, Source, VersionedSource

Payload = Union[bytes, str, dict, list, None]


def make_id(n: int) -> ComponentId:
    return uuid.UUID(int=n)


class FakeResponder:
    """MockTransport handler serving canned responses by URL path."""

    def __init__(self, routes: Optional[dict[str, tuple[int, Payload]]] = None) -> None:
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []
        self.error: Optional[Callable[[httpx.Request], Exception]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)

        if request.url.path not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})

        status, payload = self.routes[request.url.path]
        if isinstance(payload, (dict, list)):
            return httpx.Response(status, content=json.dumps(payload).encode("utf-8"))
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, content=payload or b"")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class FakeRequest(Request):
    """Request returning a canned result, optionally after a delay."""

    def __init__(
        self,
        result: Optional[Metadata] = None,
        error: Optional[BaseException] = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result
        self.error = error
        self.delay = delay
        self.runs = 0

    async def run(self, abort: Optional[AbortToken] = None) -> Optional[Metadata]:
        self.runs += 1
        if self.delay:
            await guarded(abort, asyncio.sleep(self.delay))
        if self.error is not None:
            raise self.error
        return Metadata(self.result) if self.result is not None else None


class FakeSource(VersionedSource):
    """Versioned source with an injectable request."""

    def __init__(
        self,
        identifier: ComponentId,
        version: Optional[str] = "1.0",
        request: Optional[Request] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(identifier, version, name=name or f"component-{identifier.int}")
        self.request = request

    def create_request(self) -> Request:
        if self.request is None:
            return super().create_request()
        return self.request


class PushOnlySource(Source):
    """Source that never checks actively."""

    def __init__(self, identifier: ComponentId) -> None:
        self._identifier = identifier

    @property
    def identifier(self) -> ComponentId:
        return self._identifier

    def current_info(self) -> Metadata:
        return Metadata(version="1.0")

    def is_newer(self, info: Metadata) -> bool:
        return False


class RecordingListener(UpdateListener):
    """Listener that records every notification."""

    def __init__(self) -> None:
        self.changed: list[tuple[ComponentId, Metadata]] = []
        self.available: list[list[ComponentId]] = []

    def on_info_changed(self, source_id: ComponentId, info: Metadata) -> None:
        self.changed.append((source_id, info))

    def on_updates_available(self, source_ids: list[ComponentId]) -> None:
        self.available.append(list(source_ids))


def release(tag: str, **extra: Any) -> dict[str, Any]:
    """Build a GitHub release object."""
    data: dict[str, Any] = {
        "tag_name": tag,
        "html_url": f"https://github.com/acme/widget/releases/tag/{tag}",
        "prerelease": False,
        "draft": False,
    }
    data.update(extra)
    return data


def asset(name: str) -> dict[str, Any]:
    """Build a GitHub release asset object."""
    return {
        "name": name,
        "browser_download_url": f"https://github.com/acme/widget/releases/download/{name}",
    }
