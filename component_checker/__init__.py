"""Check pluggable components for newer versions."""

from .abort import AbortToken
from .cache import UpdateCache, UpdateListener
from .constants import __version__
from .errors import (
    Cancelled,
    ConfigError,
    MalformedResponse,
    MalformedVersion,
    NetworkError,
    RemoteError,
    SchemaError,
    UnknownSource,
    Unsupported,
    UpdateCheckError,
)
from .models import CheckReport, CheckStatus, ComponentId, Metadata
from .service import UpdateService
from .sources import Request, Source, SourceRegistry

__all__ = [
    "__version__",
    "AbortToken",
    "UpdateCache",
    "UpdateListener",
    "Cancelled",
    "ConfigError",
    "MalformedResponse",
    "MalformedVersion",
    "NetworkError",
    "RemoteError",
    "SchemaError",
    "UnknownSource",
    "Unsupported",
    "UpdateCheckError",
    "CheckReport",
    "CheckStatus",
    "ComponentId",
    "Metadata",
    "UpdateService",
    "Request",
    "Source",
    "SourceRegistry",
]
