"""Error types raised while checking components for updates."""

from typing import Optional


class UpdateCheckError(Exception):
    """Base class for recoverable update check failures."""


class MalformedVersion(UpdateCheckError, ValueError):
    """A version string could not be parsed."""

    def __init__(self, version: Optional[str] = None) -> None:
        self.version = version
        if version is None:
            super().__init__("invalid version string format")
        else:
            super().__init__(f"invalid version string format: {version!r}")


class Unsupported(UpdateCheckError):
    """The source has no way to actively check for updates."""


class NetworkError(UpdateCheckError):
    """The transport failed to deliver a response."""


class MalformedResponse(UpdateCheckError):
    """The response body is not valid JSON."""


class SchemaError(UpdateCheckError):
    """The response is valid JSON but lacks the expected structure."""


class RemoteError(UpdateCheckError):
    """The server answered with a non-200 status."""

    def __init__(self, message: str, status_line: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_line = status_line


class UnknownSource(UpdateCheckError, LookupError):
    """No source is registered under the requested identifier."""


class ConfigError(UpdateCheckError):
    """The components file is missing, unreadable or invalid."""


class Cancelled(Exception):
    """The check was aborted by its caller.

    Not an UpdateCheckError: it must pass through every handler that turns
    failures into reports.
    """

    def __init__(self, message: str = "operation aborted") -> None:
        super().__init__(message)
