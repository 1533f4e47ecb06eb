"""Loading component definitions from the components file."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .constants import GITHUB_TOKEN_ENV
from .errors import ConfigError
from .logging_config import get_logger
from .models import to_component_id
from .sources import (
    Authorizer,
    GitHubConf,
    GitHubSource,
    PlainSource,
    Source,
    SourceRegistry,
    TokenAuthorizer,
)

logger = get_logger(__name__)

SOURCE_TYPES = ("plain", "github")


def default_authorizers() -> list[Authorizer]:
    """Authorizers taken from the environment (GITHUB_TOKEN)."""
    token = os.environ.get(GITHUB_TOKEN_ENV)
    if token:
        return [TokenAuthorizer(token)]
    return []


def source_from_dict(
    data: dict[str, Any],
    authorizers: Optional[list[Authorizer]] = None,
) -> Source:
    """Build a source from one entry of the components file.

    Raises:
        ConfigError: If the entry is invalid.
    """
    if not isinstance(data, dict):
        raise ConfigError("component entry is not an object")

    def _get_str(key: str, required: bool = False) -> Optional[str]:
        val = data.get(key)
        if isinstance(val, str) and val:
            return val
        if required:
            raise ConfigError(f"missing or invalid {key!r}")
        return None

    def _get_bool(key: str, default: bool) -> bool:
        val = data.get(key)
        if isinstance(val, bool):
            return val
        return default

    try:
        identifier = to_component_id(_get_str("id", required=True) or "")
    except ValueError as e:
        raise ConfigError(f"invalid 'id': {data.get('id')!r}") from e

    source_type = _get_str("source", required=True)
    common = dict(
        version=_get_str("version"),
        name=_get_str("name"),
        module=_get_str("module"),
        version_prefix=_get_str("version_prefix"),
    )

    if source_type == "plain":
        return PlainSource(identifier, url=_get_str("url", required=True) or "", **common)

    if source_type == "github":
        conf = GitHubConf(
            owner=_get_str("owner", required=True),
            repo=_get_str("repo", required=True),
            include_prereleases=_get_bool("include_prereleases", True),
            include_drafts=_get_bool("include_drafts", True),
            asset_pattern=_get_str("asset_pattern"),
            authorizers=list(authorizers or []),
        )
        return GitHubSource(
            identifier,
            conf,
            latest_only=_get_bool("latest_only", False),
            **common,
        )

    raise ConfigError(f"unknown source type {source_type!r}, expected one of {SOURCE_TYPES}")


def load_components(
    path: Path,
    authorizers: Optional[list[Authorizer]] = None,
) -> list[Source]:
    """Load sources from a components file.

    Args:
        path: Path to the JSON components file.
        authorizers: Authorizers for GitHub sources; defaults to the environment.

    Returns:
        List of sources in file order.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    if authorizers is None:
        authorizers = default_authorizers()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read components file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"components file {path} is not valid JSON: {e}") from e

    entries = data.get("components") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ConfigError(f"components file {path} has no 'components' list")

    sources = []
    for index, entry in enumerate(entries):
        try:
            sources.append(source_from_dict(entry, authorizers))
        except ConfigError as e:
            raise ConfigError(f"{path}: component #{index}: {e}") from e

    logger.debug("Loaded %d components from %s", len(sources), path)
    return sources


def load_registry(path: Path, authorizers: Optional[list[Authorizer]] = None) -> SourceRegistry:
    """Load a components file into a new registry.

    Raises:
        ConfigError: If the file is invalid or lists an identifier twice.
    """
    registry = SourceRegistry()
    for source in load_components(path, authorizers):
        try:
            registry.register(source)
        except ValueError as e:
            raise ConfigError(f"{path}: {e}") from e
    return registry
