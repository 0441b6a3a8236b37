"""Status, severity and impact color maps."""

from odh_lint.models.condition import Impact, Severity
from odh_lint.models.diagnostic import STATUS_ERROR, STATUS_FAIL, STATUS_PASS, STATUS_UNKNOWN

STATUS_COLORS: dict[str, str] = {
    STATUS_PASS: "green",
    STATUS_FAIL: "red bold",
    STATUS_ERROR: "yellow",
    STATUS_UNKNOWN: "dim",
}

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.CRITICAL: "red bold",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}

IMPACT_COLORS: dict[Impact, str] = {
    Impact.BLOCKING: "red bold",
    Impact.ADVISORY: "yellow",
    Impact.NONE: "dim",
}

STATUS_ICONS: dict[str, str] = {
    STATUS_PASS: "✓",
    STATUS_FAIL: "X",
    STATUS_ERROR: "!",
    STATUS_UNKNOWN: "?",
}


def styled_status(status: str) -> str:
    color = STATUS_COLORS.get(status, "white")
    icon = STATUS_ICONS.get(status, "?")
    return f"[{color}]{icon} {status}[/{color}]"


def styled_severity(severity: Severity | None) -> str:
    if severity is None:
        return "-"
    color = SEVERITY_COLORS.get(severity, "white")
    return f"[{color}]{severity.value}[/{color}]"


def styled_impact(impact: Impact | None) -> str:
    if impact is None:
        return "-"
    color = IMPACT_COLORS.get(impact, "white")
    return f"[{color}]{impact.value}[/{color}]"
