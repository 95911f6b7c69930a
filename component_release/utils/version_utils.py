"""Version management utilities"""

import functools
from typing import Optional, Tuple, List

from packaging.version import parse, Version, InvalidVersion

from ..constants import VERSION_PATTERN, DEFAULT_FIRST_VERSION

BUMP_TYPES = ("major", "minor", "patch")


def parse_version(version_str: str) -> Optional[Version]:
    """
    Parse version string

    Args:
        version_str: Version string

    Returns:
        Version object or None if invalid
    """
    try:
        return parse(version_str)
    except InvalidVersion:
        return None


def is_valid_version(version: str) -> bool:
    """
    Check if version string is valid semver

    Args:
        version: Version string

    Returns:
        True if valid
    """
    return bool(version) and VERSION_PATTERN.match(version) is not None


def extract_version_parts(version: str) -> Tuple[int, int, int, str, str]:
    """
    Extract version parts

    Args:
        version: Version string

    Returns:
        Tuple of (major, minor, patch, prerelease, build)
    """
    match = VERSION_PATTERN.match(version)
    if not match:
        raise ValueError(f"Invalid version: {version}")

    major = int(match.group('major'))
    minor = int(match.group('minor'))
    patch = int(match.group('patch'))
    prerelease = match.group('prerelease') or ""
    build = match.group('build') or ""

    return major, minor, patch, prerelease, build


def _sort_key(version: str):
    """Semver precedence key; build metadata is ignored"""
    major, minor, patch, prerelease, _ = extract_version_parts(version)
    if not prerelease:
        # A release ranks above every prerelease of the same core
        return (major, minor, patch, 1, ())

    identifiers = []
    for part in prerelease.split('.'):
        if part.isdigit():
            identifiers.append((0, int(part), ""))
        else:
            identifiers.append((1, 0, part))
    return (major, minor, patch, 0, tuple(identifiers))


def compare_versions(version1: str, version2: str) -> int:
    """
    Compare two versions

    Args:
        version1: First version
        version2: Second version

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2
    """
    if is_valid_version(version1) and is_valid_version(version2):
        k1, k2 = _sort_key(version1), _sort_key(version2)
    else:
        k1, k2 = parse_version(version1), parse_version(version2)
        if k1 is None or k2 is None:
            # Fallback to string comparison
            k1, k2 = version1, version2

    if k1 < k2:
        return -1
    elif k1 > k2:
        return 1
    return 0


def is_greater(version: str, than: Optional[str]) -> bool:
    """Check that ``version`` is strictly greater than ``than`` (None counts as lowest)"""
    if than is None:
        return True
    return compare_versions(version, than) > 0


def suggest_version(current_version: Optional[str] = None,
                    bump_type: str = "patch") -> str:
    """
    Suggest next version

    Args:
        current_version: Current version (optional)
        bump_type: Type of bump (major, minor, patch)

    Returns:
        Suggested version string
    """
    if not current_version:
        return DEFAULT_FIRST_VERSION

    if bump_type not in BUMP_TYPES:
        raise ValueError(f"Invalid bump type: {bump_type}")

    major, minor, patch, prerelease, _ = extract_version_parts(current_version)

    if bump_type == "major":
        return f"{major + 1}.0.0"
    elif bump_type == "minor":
        return f"{major}.{minor + 1}.0"
    elif prerelease:
        # 1.0.0-rc.1 -> 1.0.0
        return f"{major}.{minor}.{patch}"
    return f"{major}.{minor}.{patch + 1}"


def sort_versions(versions: List[str], reverse: bool = False) -> List[str]:
    """
    Sort version strings by semver precedence

    Args:
        versions: List of version strings
        reverse: Sort in descending order

    Returns:
        Sorted list
    """
    return sorted(versions, key=functools.cmp_to_key(compare_versions), reverse=reverse)
