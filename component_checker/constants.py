"""Constants and configuration for Component Checker."""

from pathlib import Path

# Version
__version__ = "0.1.0"

# Paths
DEFAULT_CONFIG_FILE = Path("components.json")

# Timeouts (seconds)
DEFAULT_HTTP_TIMEOUT = 30.0
GITHUB_TIMEOUT = 30.0
PLAIN_URL_TIMEOUT = 30.0
ABORT_POLL_INTERVAL = 0.1

# GitHub API
GITHUB_API_BASE = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github+json"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"

# Environment
LOG_LEVEL_ENV = "COMPONENT_CHECKER_LOG_LEVEL"

# Metadata keys
KEY_VERSION = "version"
KEY_NAME = "name"
KEY_MODULE = "module"
KEY_DOWNLOAD_URL = "download_url"
KEY_DOWNLOAD_PAGE = "download_page"
KEY_RELEASE = "release"
KEY_ASSET = "asset"

# HTTP Headers
DEFAULT_USER_AGENT = "Component-Checker/{}".format(__version__)

# Concurrent checking
MAX_CONCURRENT_CHECKS = 5
