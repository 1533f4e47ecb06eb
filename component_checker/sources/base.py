"""Base classes for update sources and their requests."""

from abc import ABC, abstractmethod
from typing import Optional

from ..abort import AbortToken
from ..constants import KEY_MODULE, KEY_NAME, KEY_VERSION
from ..errors import Unsupported
from ..models import ComponentId, Metadata
from ..version import is_newer


class Request(ABC):
    """A one-shot remote fetch producing version metadata."""

    @abstractmethod
    async def run(self, abort: Optional[AbortToken] = None) -> Optional[Metadata]:
        """Fetch the remote version information.

        Args:
            abort: Optional token to cancel the fetch.

        Returns:
            Fresh Metadata containing at least a "version" key, or None if
            the remote side has nothing acceptable to report.

        Raises:
            NetworkError, MalformedResponse, SchemaError, RemoteError: On failure.
            Cancelled: If ``abort`` fires.
        """
        pass


class Source(ABC):
    """Abstract base class for update sources.

    A source ties one component identifier to its locally known version and
    to the way newer versions are looked up.
    """

    @property
    @abstractmethod
    def identifier(self) -> ComponentId:
        """Return the identifier of the component this source describes."""
        pass

    @abstractmethod
    def current_info(self) -> Metadata:
        """Return what is known locally about the component."""
        pass

    @abstractmethod
    def is_newer(self, info: Metadata) -> bool:
        """Check whether ``info`` describes a newer version than the local one.

        Raises:
            MalformedVersion: If a version cannot be parsed.
        """
        pass

    def create_request(self) -> Request:
        """Create a request that fetches the latest version information.

        Raises:
            Unsupported: If the source cannot check actively.
        """
        raise Unsupported(f"source {self.identifier} does not provide a way to check for updates")


class VersionedSource(Source):
    """Source whose local state is a fixed name, module and version."""

    def __init__(
        self,
        identifier: ComponentId,
        version: Optional[str],
        name: Optional[str] = None,
        module: Optional[str] = None,
        version_prefix: Optional[str] = None,
    ) -> None:
        self._identifier = identifier
        self.version = version
        self.name = name
        self.module = module
        self.version_prefix = version_prefix

    @property
    def identifier(self) -> ComponentId:
        return self._identifier

    def current_info(self) -> Metadata:
        info = Metadata()
        if self.name:
            info[KEY_NAME] = self.name
        if self.module:
            info[KEY_MODULE] = self.module
        if self.version is not None:
            info[KEY_VERSION] = self.version
        return info

    def is_newer(self, info: Metadata) -> bool:
        return is_newer(info.version, self.version, self.version_prefix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identifier}, version={self.version!r})"
