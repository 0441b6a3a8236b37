"""Data models for odh-lint."""

from __future__ import annotations

import enum


class CheckGroup(enum.Enum):
    COMPONENT = "component"
    SERVICE = "service"
    WORKLOAD = "workload"
    DEPENDENCY = "dependency"
    CONFIGURATION = "configuration"

    @classmethod
    def from_str(cls, s: str) -> CheckGroup | None:
        for member in cls:
            if member.value == s:
                return member
        return None

    @property
    def plural(self) -> str:
        if self is CheckGroup.DEPENDENCY:
            return "dependencies"
        return self.value + "s"


# Reporting order: dependencies first, workloads last.
CANONICAL_GROUP_ORDER: tuple[CheckGroup, ...] = (
    CheckGroup.DEPENDENCY,
    CheckGroup.SERVICE,
    CheckGroup.COMPONENT,
    CheckGroup.CONFIGURATION,
    CheckGroup.WORKLOAD,
)

# Bare category names accepted as selector shortcuts ("components" -> COMPONENT).
CATEGORY_SHORTCUTS: dict[str, CheckGroup] = {g.plural: g for g in CheckGroup}
