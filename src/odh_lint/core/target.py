"""Execution target handed to every check."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Protocol

from packaging.version import Version

from odh_lint.config.settings import settings


class ResourceReader(Protocol):
    """Read-only access to cluster resources; checks cannot write through it."""

    def get_resource(self, resource_type: Any, name: str, namespace: str | None = None) -> dict | None:
        """Return a single resource, or None if it does not exist."""

    def list_resources(
        self,
        resource_type: Any,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict]:
        """Return every instance of a resource type (empty if the type is not served)."""


@dataclass(frozen=True)
class Target:
    client: ResourceReader | None = None
    # Version being upgraded FROM; in lint mode equal to target_version.
    current_version: Version | None = None
    # Version being upgraded TO; in lint mode the detected cluster version.
    target_version: Version | None = None
    # Set only for workload checks operating on one discovered resource.
    resource: dict | None = None
    logger: logging.Logger | None = None
    debug: bool = False

    @property
    def is_lint_mode(self) -> bool:
        return self.current_version == self.target_version

    @property
    def is_upgrade(self) -> bool:
        return (
            self.current_version is not None
            and self.target_version is not None
            and self.target_version > self.current_version
        )

    def with_defaults(self) -> Target:
        """Return this target with the default logging sink filled in when absent."""
        if self.logger is not None:
            return self
        return replace(self, logger=logging.getLogger(settings.checks_logger_name))
