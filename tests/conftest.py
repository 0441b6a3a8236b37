"""Shared fixtures: an in-memory ResourceReader and cluster object builders."""

from __future__ import annotations

import threading
from typing import Any

import pytest
from packaging.version import Version

from odh_lint.core.check import BaseCheck
from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CATEGORY_SHORTCUTS, CheckGroup
from odh_lint.models.condition import TYPE_VALIDATED, ConditionStatus, new_condition
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.models.resources import DATA_SCIENCE_CLUSTER, DSC_INITIALIZATION, ResourceType


def _matches_labels(obj: dict, selector: str) -> bool:
    """Equality and existence terms only (``a=b,c``)."""
    labels = obj.get("metadata", {}).get("labels") or {}
    for term in selector.split(","):
        key, sep, value = term.strip().partition("=")
        if key not in labels or (sep and labels[key] != value):
            return False
    return True


class FakeReader:
    """ResourceReader backed by a dict of resource type -> items.

    ``errors`` maps a resource type to an exception raised on any access to it.
    """

    def __init__(self, objects: dict[ResourceType, list[dict]] | None = None):
        self.objects: dict[ResourceType, list[dict]] = dict(objects or {})
        self.errors: dict[ResourceType, BaseException] = {}
        self.calls: list[tuple[str, str]] = []

    def add(self, resource_type: ResourceType, obj: dict) -> FakeReader:
        self.objects.setdefault(resource_type, []).append(obj)
        return self

    def _raise_for(self, resource_type: ResourceType) -> None:
        err = self.errors.get(resource_type)
        if err is not None:
            raise err

    def get_resource(self, resource_type: ResourceType, name: str, namespace: str | None = None) -> dict | None:
        self.calls.append(("get", resource_type.plural))
        self._raise_for(resource_type)
        for obj in self.objects.get(resource_type, []):
            meta = obj.get("metadata", {})
            if meta.get("name") == name and (namespace is None or meta.get("namespace") == namespace):
                return obj
        return None

    def list_resources(
        self,
        resource_type: ResourceType,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict]:
        self.calls.append(("list", resource_type.plural))
        self._raise_for(resource_type)
        items = self.objects.get(resource_type, [])
        if namespace is not None:
            items = [o for o in items if o.get("metadata", {}).get("namespace") == namespace]
        if label_selector:
            items = [o for o in items if _matches_labels(o, label_selector)]
        return list(items)


def make_dsc(components: dict[str, str] | None = None, version: str | None = None) -> dict[str, Any]:
    """DataScienceCluster with ``{component: managementState}``."""
    obj: dict[str, Any] = {
        "apiVersion": DATA_SCIENCE_CLUSTER.api_version,
        "kind": DATA_SCIENCE_CLUSTER.kind,
        "metadata": {"name": "default-dsc"},
        "spec": {
            "components": {name: {"managementState": state} for name, state in (components or {}).items()},
        },
    }
    if version is not None:
        obj["status"] = {"release": {"name": "Open Data Hub", "version": version}}
    return obj


def make_dsci(service_mesh_state: str | None = None, version: str | None = None) -> dict[str, Any]:
    spec: dict[str, Any] = {"applicationsNamespace": "opendatahub"}
    if service_mesh_state is not None:
        spec["serviceMesh"] = {"managementState": service_mesh_state}
    obj: dict[str, Any] = {
        "apiVersion": DSC_INITIALIZATION.api_version,
        "kind": DSC_INITIALIZATION.kind,
        "metadata": {"name": "default-dsci"},
        "spec": spec,
    }
    if version is not None:
        obj["status"] = {"release": {"version": version}}
    return obj


@pytest.fixture
def reader() -> FakeReader:
    return FakeReader()


@pytest.fixture
def upgrade_target(reader: FakeReader) -> Target:
    """2.x -> 3.x upgrade against the ``reader`` fixture."""
    return Target(client=reader, current_version=Version("2.16.0"), target_version=Version("3.0.0"))


class StubCheck(BaseCheck):
    """Configurable check for registry and executor tests.

    ``applies`` and ``outcome`` may be values or exceptions; ``outcome`` may also
    be a callable taking (ctx, target).
    """

    def __init__(self, check_id: str, applies: Any = True, outcome: Any = None, group: CheckGroup | None = None):
        prefix = check_id.split(".")[0]
        parts = check_id.split(".")
        super().__init__(
            group=group or CATEGORY_SHORTCUTS.get(prefix, CheckGroup.COMPONENT),
            kind=parts[1] if len(parts) > 1 else check_id,
            check_type=parts[2] if len(parts) > 2 else "stub",
            check_id=check_id,
            name=f"Stub :: {check_id}",
            description=f"stub check {check_id}",
        )
        self.applies = applies
        self.outcome = outcome
        self.validated = threading.Event()

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        if isinstance(self.applies, BaseException):
            raise self.applies
        return self.applies

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        self.validated.set()
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        if callable(self.outcome):
            return self.outcome(ctx, target)
        if self.outcome is not None:
            return self.outcome
        dr = self.new_result()
        dr.set_condition(new_condition(TYPE_VALIDATED, ConditionStatus.TRUE, message=f"{self.check_id} ok"))
        return dr
