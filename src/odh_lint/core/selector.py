"""Resolve selector patterns against check IDs."""

from __future__ import annotations

import fnmatch

from odh_lint.core.check import Check
from odh_lint.core.errors import InvalidPatternError
from odh_lint.models import CATEGORY_SHORTCUTS

WILDCARD = "*"


class GlobSyntaxError(ValueError):
    """Malformed shell-glob pattern."""


def _to_fnmatch(pattern: str) -> str:
    """Check glob syntax and translate it to an fnmatch pattern.

    Supports ``*``, ``?``, character classes (``[abc]``, ``[a-z]``, negated with
    ``!`` or ``^``) and backslash escapes. Raises GlobSyntaxError for an
    unterminated or empty class and for a trailing backslash.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                raise GlobSyntaxError("trailing backslash escape")
            escaped = pattern[i + 1]
            out.append(f"[{escaped}]" if escaped in "*?[" else escaped)
            i += 2
            continue
        if c == "[":
            j = i + 1
            negate = j < n and pattern[j] in "!^"
            if negate:
                j += 1
            if j < n and pattern[j] == "]":
                raise GlobSyntaxError(f"empty character class at offset {i}")
            body: list[str] = []
            while j < n and pattern[j] != "]":
                if pattern[j] == "\\":
                    if j + 1 >= n:
                        raise GlobSyntaxError("trailing backslash escape")
                    j += 1
                body.append(pattern[j])
                j += 1
            if j >= n:
                raise GlobSyntaxError(f"unterminated character class at offset {i}")
            members = "".join(body)
            if "]" in members:
                # fnmatch only accepts a literal ']' as the first class member
                members = "]" + members.replace("]", "")
            out.append("[" + ("!" if negate else "") + members + "]")
            i = j + 1
            continue
        out.append(c)
        i += 1
    return "".join(out)


def compile_pattern(pattern: str) -> str:
    """Validate *pattern* and return its fnmatch form.

    Raises InvalidPatternError (chained to the syntax error) when malformed.
    """
    try:
        return _to_fnmatch(pattern)
    except GlobSyntaxError as e:
        raise InvalidPatternError(pattern, str(e)) from e


def matches_pattern(check: Check, pattern: str, compiled: str | None = None) -> bool:
    """Return True if *check* is selected by *pattern*.

    Resolution order:
      1. ``*`` matches every check
      2. bare category names ("components", "services", ...) match by group
      3. exact match against the full ID
      4. glob match against the full ID ("components.*", "*.dashboard", "*dash*")
    """
    if pattern == WILDCARD:
        return True

    group = CATEGORY_SHORTCUTS.get(pattern)
    if group is not None:
        return check.group == group

    if pattern == check.check_id:
        return True

    if compiled is None:
        compiled = compile_pattern(pattern)
    return fnmatch.fnmatchcase(check.check_id, compiled)
