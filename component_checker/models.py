"""Data models for Component Checker."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union
import uuid

from .constants import (
    KEY_ASSET,
    KEY_DOWNLOAD_PAGE,
    KEY_DOWNLOAD_URL,
    KEY_MODULE,
    KEY_NAME,
    KEY_RELEASE,
    KEY_VERSION,
)

ComponentId = uuid.UUID
MetadataValue = Union[str, bytes]


def to_component_id(value: Union[str, uuid.UUID]) -> ComponentId:
    """Convert a UUID string (any of the usual spellings) to a ComponentId.

    Raises:
        ValueError: If the value is not a valid UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value).strip())


class Metadata(dict[str, MetadataValue]):
    """Facts about one component version, keyed by convention.

    A plain ordered mapping; the properties only read the well-known keys.
    """

    def _get_str(self, key: str) -> Optional[str]:
        val = self.get(key)
        if isinstance(val, bytes):
            return val.decode("utf-8", errors="replace")
        return val

    @property
    def version(self) -> Optional[str]:
        return self._get_str(KEY_VERSION)

    @property
    def name(self) -> Optional[str]:
        return self._get_str(KEY_NAME)

    @property
    def module(self) -> Optional[str]:
        return self._get_str(KEY_MODULE)

    @property
    def download_url(self) -> Optional[str]:
        return self._get_str(KEY_DOWNLOAD_URL)

    @property
    def download_page(self) -> Optional[str]:
        return self._get_str(KEY_DOWNLOAD_PAGE)

    @property
    def release(self) -> Optional[str]:
        return self._get_str(KEY_RELEASE)

    @property
    def asset(self) -> Optional[str]:
        return self._get_str(KEY_ASSET)

    def copy(self) -> "Metadata":
        return Metadata(self)


class CheckStatus(Enum):
    UPDATE_AVAILABLE = "update"
    UP_TO_DATE = "ok"
    NO_RELEASE = "none"
    ERROR = "error"


@dataclass
class CheckReport:
    """Outcome of one component check."""

    source_id: ComponentId
    info: Optional[Metadata] = None
    current: Optional[Metadata] = None
    newer: bool = False
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def status(self) -> CheckStatus:
        if self.error:
            return CheckStatus.ERROR
        if self.info is None:
            return CheckStatus.NO_RELEASE
        if self.newer:
            return CheckStatus.UPDATE_AVAILABLE
        return CheckStatus.UP_TO_DATE

    @property
    def name(self) -> str:
        for info in (self.current, self.info):
            if info is not None and info.name:
                return info.name
        return str(self.source_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.source_id),
            "name": self.name,
            "status": self.status.value,
            "current_version": self.current.version if self.current else None,
            "latest_version": self.info.version if self.info else None,
            "download_url": self.info.download_url if self.info else None,
            "download_page": self.info.download_page if self.info else None,
            "error": self.error,
            "error_kind": self.error_kind,
        }
