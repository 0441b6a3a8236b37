"""Dotted-path lookup into unstructured Kubernetes objects."""

from __future__ import annotations

from typing import Any

_MISSING = object()


def lookup(obj: Any, path: str, default: Any = None) -> Any:
    """Return the value at *path* ("spec.components.codeflare") or *default*.

    A leading dot is accepted (".status.release.version").
    """
    current = obj
    for key in path.lstrip(".").split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(key, _MISSING)
        if current is _MISSING:
            return default
    return current


def lookup_str(obj: Any, path: str) -> str | None:
    """Like lookup, but only returns non-empty strings."""
    value = lookup(obj, path)
    if isinstance(value, str) and value:
        return value
    return None
