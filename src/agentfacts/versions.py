"""
Version extraction, normalization and comparison.

User-Agent strings report versions in every shape imaginable: "120.0.0.0",
"10_15_7", "3.07", "9.80 (Windows NT 6.1; U; en)". This module reduces all of
them to a fixed (major, minor, patch) triple and compares textual queries
against that triple at the precision the caller asks for.

Key Design Decisions:
- Never raise: any garbage in becomes zeros out
- Triples are always exactly 3 non-negative integers
- A query only compares as many components as it spells out, so "3"
  matches 3.5.1 while "3.0" does not
"""

import re

VersionTriple = tuple[int, int, int]

ZERO_VERSION: VersionTriple = (0, 0, 0)

DIGITS = "0123456789"

# Scanning stops once this many characters that are neither digits,
# dots nor underscores have been seen.
MAX_INVALID_CHARS = 3

# Terminator of a version token inside the identity string.
TOKEN_TERMINATOR = " );"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def resolve_version_token(marker_key: str, identity: str) -> str:
    """
    Extract the raw version token that follows a marker.

    Args:
        marker_key: Lowercase marker, e.g. "firefox/" or "msie "
        identity: The User-Agent string (lowercased here)

    Returns:
        Everything after the first occurrence of the marker, up to the
        terminator (or end of string). Empty string if the marker is absent.

    Examples:
        >>> resolve_version_token("msie ", "Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1)")
        '8.0; windows nt 6.1)'
    """
    ua_lower = identity.lower()

    start = ua_lower.find(marker_key)
    if start == -1:
        return ""
    start += len(marker_key)

    end = ua_lower.find(TOKEN_TERMINATOR, start)
    if end == -1:
        return ua_lower[start:]
    return ua_lower[start:end]


def normalize_version(raw: str) -> VersionTriple:
    """
    Normalize a raw version token into a (major, minor, patch) triple.

    Digits and dots are kept, underscores become dots, anything else counts
    as invalid and scanning stops at the third invalid character. A "0"
    right after a dot and right before another digit gets a dot appended,
    so "3.07" reads as 3.0.7.

    Examples:
        >>> normalize_version("3.07")
        (3, 0, 7)
        >>> normalize_version("10_15_7) applewebkit")
        (10, 15, 7)
        >>> normalize_version("")
        (0, 0, 0)
    """
    normalized = []
    invalid_chars = 0

    for i, char in enumerate(raw):
        if invalid_chars >= MAX_INVALID_CHARS:
            break

        if char in DIGITS or char == ".":
            normalized.append(char)
            # 3.07 -> 3.0.7
            if (
                char == "0"
                and i > 0
                and raw[i - 1] == "."
                and i < len(raw) - 1
                and raw[i + 1] in DIGITS
            ):
                normalized.append(".")
        elif char == "_":
            normalized.append(".")
        else:
            invalid_chars += 1

    components = []
    for component in "".join(normalized).split(".")[:3]:
        try:
            components.append(int(component))
        except ValueError:
            components.append(0)

    while len(components) < 3:
        components.append(0)

    return (components[0], components[1], components[2])


def _parse_component(text: str) -> int:
    """Parse the leading (signed) integer of a query component, 0 if there is none."""
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        return 0


def compare_versions(query: str, target: VersionTriple, if_less, if_equal, if_more):
    """
    Compare a textual version query against a version triple.

    Only the components present in the query are compared; a query that runs
    out of components before a difference is found counts as equal. The
    outcome is one of the three caller-supplied values, which lets the same
    comparison back equality, at-least and less-than checks:

        is_version:    compare_versions(q, v, False, True, False)
        at_least:      compare_versions(q, v, True, True, False)
        less_than:     compare_versions(q, v, False, False, True)

    Args:
        query: Version like "3", "3.5" or "3.5.1"
        target: Normalized version triple
        if_less: Returned when the query is lower than the target
        if_equal: Returned when equal at the query's precision
        if_more: Returned when the query is higher than the target

    Examples:
        >>> compare_versions("3", (3, 5, 1), False, True, False)
        True
        >>> compare_versions("3.0", (3, 5, 1), False, True, False)
        False
    """
    components = query.split(".")

    for i in range(3):
        if len(components) < i + 1:
            return if_equal

        value = _parse_component(components[i])
        if value > target[i]:
            return if_more
        if value < target[i]:
            return if_less

    return if_equal


def format_version(version: VersionTriple) -> str:
    """Render a triple as "major.minor.patch"."""
    return ".".join(str(component) for component in version)
