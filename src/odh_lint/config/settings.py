"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to *default*."""
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _default_max_workers() -> int:
    return _env_int("ODH_LINT_MAX_WORKERS", 8)


def _default_timeout() -> int:
    return _env_int("ODH_LINT_TIMEOUT", 600)


def _default_request_timeout() -> int:
    return _env_int("ODH_LINT_REQUEST_TIMEOUT", 30)


@dataclass
class Settings:
    max_workers: int = field(default_factory=_default_max_workers)
    timeout_seconds: int = field(default_factory=_default_timeout)
    request_timeout: int = field(default_factory=_default_request_timeout)
    default_output: str = "table"  # "table", "json" or "yaml"
    default_selector: str = "*"
    annotation_domain: str = "opendatahub.io"
    checks_logger_name: str = "odh_lint.checks"

    @property
    def output_formats(self) -> tuple[str, ...]:
        return ("table", "json", "yaml")


# Global singleton
settings = Settings()
