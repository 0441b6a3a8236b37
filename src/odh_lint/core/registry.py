"""Check registry: owns the set of known checks and resolves selectors."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from odh_lint.core.check import Check
from odh_lint.core.errors import DuplicateCheckError
from odh_lint.core.selector import WILDCARD, compile_pattern, matches_pattern
from odh_lint.models import CATEGORY_SHORTCUTS, CheckGroup

logger = logging.getLogger(__name__)


class CheckRegistry:
    """Stores checks keyed by ID, preserving registration order.

    Registration is expected to complete during startup, before any lookup.
    Writes are serialized with a lock; lookups read a snapshot and take no lock,
    since the mapping is additive-only and never mutated once a run begins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._checks: dict[str, Check] = {}

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, check_id: object) -> bool:
        return check_id in self._checks

    def register(self, check: Check) -> None:
        """Add *check*; raise DuplicateCheckError if its ID is taken."""
        with self._lock:
            if check.check_id in self._checks:
                raise DuplicateCheckError(check.check_id)
            # Copy-on-write so concurrent readers never observe a resize.
            checks = dict(self._checks)
            checks[check.check_id] = check
            self._checks = checks
        logger.debug("Registered check %s", check.check_id)

    def must_register(self, check: Check) -> None:
        """Register *check*, logging and re-raising on conflict."""
        try:
            self.register(check)
        except DuplicateCheckError:
            logger.error("Failed to register check %s", check.check_id)
            raise

    def get(self, check_id: str) -> Check | None:
        return self._checks.get(check_id)

    def list_all(self) -> list[Check]:
        """All checks in registration order."""
        return list(self._checks.values())

    def list_by_group(self, group: CheckGroup) -> list[Check]:
        return [c for c in self._checks.values() if c.group == group]

    def list_by_pattern(self, pattern: str, group: CheckGroup | None = None) -> list[Check]:
        """Return checks whose ID matches *pattern* and, if given, whose group is *group*.

        Raises InvalidPatternError when *pattern* is not a well-formed glob.
        A pattern that matches nothing returns an empty list.
        """
        compiled = None
        if pattern != WILDCARD and pattern not in CATEGORY_SHORTCUTS:
            compiled = compile_pattern(pattern)

        selected: list[Check] = []
        for check in self._checks.values():
            if not matches_pattern(check, pattern, compiled):
                continue
            if group is not None and check.group != group:
                continue
            selected.append(check)
        return selected

    def list_by_patterns(
        self,
        patterns: Iterable[str],
        group: CheckGroup | None = None,
    ) -> list[Check]:
        """Union of several selectors, de-duplicated, in registration order."""
        selected_ids: set[str] = set()
        for pattern in patterns:
            selected_ids.update(c.check_id for c in self.list_by_pattern(pattern, group))
        return [c for c in self._checks.values() if c.check_id in selected_ids]


# Process-wide registry used by checks that self-register at import time.
_GLOBAL_REGISTRY = CheckRegistry()


def get_global_registry() -> CheckRegistry:
    return _GLOBAL_REGISTRY


def must_register_check(check: Check) -> None:
    """Register *check* in the process-wide registry."""
    _GLOBAL_REGISTRY.must_register(check)
