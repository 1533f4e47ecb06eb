"""Dot-separated numeric version parsing and comparison."""

from typing import Optional, Sequence

from .errors import MalformedVersion

# ASCII whitespace only; str.strip() with no argument would also eat Unicode spaces.
_WHITESPACE = " \t\n\r\f\v"
_DIGITS = frozenset("0123456789")


def parse_version(version: Optional[str], prefix: Optional[str] = None) -> list[int]:
    """Parse a version string into its numeric segments.

    Leading and trailing whitespace is ignored, and ``prefix`` is stripped
    when the string starts with it (it is never required).
    E.g., "v1.02.3" with prefix "v" -> [1, 2, 3]

    Args:
        version: Version string, or None for "no known version".
        prefix: Optional literal prefix such as "v".

    Returns:
        List of segments. Empty only when ``version`` is None.

    Raises:
        MalformedVersion: If a segment is empty or not made of ASCII digits,
            or the string is blank.
    """
    if version is None:
        return []

    text = version.strip(_WHITESPACE)
    if prefix and text.startswith(prefix):
        text = text[len(prefix):]

    if not text:
        raise MalformedVersion(version)

    parts = []
    for segment in text.split("."):
        if not segment or not _DIGITS.issuperset(segment):
            raise MalformedVersion(version)
        parts.append(int(segment))

    return parts


def compare_segments(parts1: Sequence[int], parts2: Sequence[int]) -> int:
    """Compare two segment lists, padding the shorter one with zeros.

    Returns:
        -1 if parts1 < parts2, 0 if equal, 1 if parts1 > parts2.
    """
    for i in range(max(len(parts1), len(parts2))):
        x1 = parts1[i] if i < len(parts1) else 0
        x2 = parts2[i] if i < len(parts2) else 0
        if x1 != x2:
            return 1 if x1 > x2 else -1
    return 0


def compare_versions(
    version1: Optional[str],
    version2: Optional[str],
    prefix: Optional[str] = None,
) -> int:
    """Compare two version strings.

    Args:
        version1: First version string.
        version2: Second version string.
        prefix: Optional literal prefix stripped from both.

    Returns:
        -1 if version1 < version2, 0 if equal, 1 if version1 > version2.

    Raises:
        MalformedVersion: If either string is malformed.
    """
    return compare_segments(
        parse_version(version1, prefix),
        parse_version(version2, prefix),
    )


def is_newer(
    available: Optional[str],
    current: Optional[str],
    prefix: Optional[str] = None,
) -> bool:
    """Return True if ``available`` is strictly newer than ``current``."""
    return compare_versions(available, current, prefix) > 0


def format_version(parts: Sequence[int]) -> str:
    """Join segments back into a dotted string."""
    return ".".join(str(part) for part in parts)
