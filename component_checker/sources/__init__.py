"""Update sources and the registry that looks them up."""

from typing import Iterator, Optional, Union
import uuid

from ..errors import UnknownSource
from ..logging_config import get_logger
from ..models import ComponentId
from .base import Request, Source, VersionedSource
from .github import (
    Authorizer,
    GitHubConf,
    GitHubLatestReleaseRequest,
    GitHubReleasesRequest,
    GitHubSource,
    TokenAuthorizer,
)
from .plain import PlainSource, PlainVersionRequest

__all__ = [
    "Request",
    "Source",
    "VersionedSource",
    "Authorizer",
    "TokenAuthorizer",
    "GitHubConf",
    "GitHubReleasesRequest",
    "GitHubLatestReleaseRequest",
    "GitHubSource",
    "PlainSource",
    "PlainVersionRequest",
    "SourceRegistry",
]

logger = get_logger(__name__)


class SourceRegistry:
    """Registry of update sources, in registration order."""

    def __init__(self, sources: Optional[list[Source]] = None) -> None:
        self._sources: list[Source] = []
        for source in sources or []:
            self.register(source)

    def register(self, source: Source) -> None:
        """Register a source.

        Args:
            source: The source to register.

        Raises:
            ValueError: If a source with the same identifier is registered.
        """
        if self.find(source.identifier) is not None:
            raise ValueError(f"source already registered: {source.identifier}")
        self._sources.append(source)
        logger.debug("Registered source %s", source.identifier)

    def unregister(self, source_id: ComponentId) -> bool:
        """Remove a source.

        Returns:
            True if a source was removed, False if none was registered.
        """
        source = self.find(source_id)
        if source is None:
            return False
        self._sources.remove(source)
        return True

    def find(self, source_id: Union[ComponentId, str]) -> Optional[Source]:
        """Get the source for an identifier, or None if not registered."""
        if not isinstance(source_id, uuid.UUID):
            try:
                source_id = uuid.UUID(str(source_id))
            except ValueError:
                return None
        for source in self._sources:
            if source.identifier == source_id:
                return source
        return None

    def get(self, source_id: Union[ComponentId, str]) -> Source:
        """Get the source for an identifier.

        Raises:
            UnknownSource: If no source is registered under the identifier.
        """
        source = self.find(source_id)
        if source is None:
            raise UnknownSource(f"unregistered source: {source_id}")
        return source

    def sources(self) -> list[Source]:
        return list(self._sources)

    def identifiers(self) -> list[ComponentId]:
        return [source.identifier for source in self._sources]

    def __iter__(self) -> Iterator[Source]:
        return iter(self.sources())

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, source_id: object) -> bool:
        return isinstance(source_id, (uuid.UUID, str)) and self.find(source_id) is not None
