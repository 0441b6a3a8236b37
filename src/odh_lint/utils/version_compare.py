"""Version parsing and upgrade-range helpers."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version


def parse_version(v: str | None) -> Version | None:
    """Parse a version string, returning None on failure.

    Partial versions are accepted ("3.0" compares equal to "3.0.0").
    """
    if not v:
        return None
    v = v.strip()
    try:
        return Version(v)
    except InvalidVersion:
        # Try stripping leading 'v'
        if v.startswith("v"):
            try:
                return Version(v[1:])
            except InvalidVersion:
                pass
    return None


def is_upgrade_from_2x_to_3x(current: Version | None, target: Version | None) -> bool:
    """Return True if the pair is an upgrade from a 2.x release to a 3.x release."""
    if current is None or target is None:
        return False
    return current.major == 2 and target.major == 3


def is_version_at_least(v: Version | None, major: int, minor: int = 0) -> bool:
    if v is None:
        return False
    return (v.major, v.minor) >= (major, minor)


def major_minor_label(v: Version | None) -> str:
    """Return "3.x" style labels used in check messages."""
    if v is None:
        return "unknown"
    return f"{v.major}.x"
