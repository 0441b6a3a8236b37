"""Helpers for checks that report impacted workload resources."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from odh_lint.checks.shared.components import set_target_version
from odh_lint.config.settings import settings
from odh_lint.core.check import BaseCheck
from odh_lint.core.target import Target
from odh_lint.models.condition import Condition
from odh_lint.models.diagnostic import DiagnosticResult, ImpactedObject
from odh_lint.models.resources import ResourceType

ANNOTATION_IMPACTED_COUNT = f"workload.{settings.annotation_domain}/impacted-count"


@dataclass
class WorkloadRequest:
    target: Target
    result: DiagnosticResult
    items: list[dict]


WorkloadConditionFn = Callable[[WorkloadRequest], list[Condition]]


class WorkloadValidation:
    """List instances of *resource_type* and let *fn* turn them into conditions.

    Items not accepted by the optional filter are dropped first. Every
    remaining item becomes an impacted object unless *fn* set its own.
    """

    def __init__(
        self,
        check: BaseCheck,
        target: Target,
        resource_type: ResourceType,
        item_filter: Callable[[dict], bool] | None = None,
    ):
        self.check = check
        self.target = target
        self.resource_type = resource_type
        self.item_filter = item_filter

    def list_items(self) -> list[dict]:
        if self.target.client is None:
            return []
        items = self.target.client.list_resources(self.resource_type)
        if self.item_filter is not None:
            items = [item for item in items if self.item_filter(item)]
        return items

    def complete(self, fn: WorkloadConditionFn) -> DiagnosticResult:
        dr = self.check.new_result()
        set_target_version(dr, self.target)

        items = self.list_items()
        dr.annotations[ANNOTATION_IMPACTED_COUNT] = str(len(items))

        for condition in fn(WorkloadRequest(target=self.target, result=dr, items=items)):
            dr.set_condition(condition)

        if not dr.impacted_objects:
            dr.impacted_objects = [self._impacted(item) for item in items]
        return dr

    def _impacted(self, item: dict) -> ImpactedObject:
        obj = ImpactedObject.from_resource(item)
        # list responses omit kind/apiVersion on items for some servers
        obj.kind = obj.kind or self.resource_type.kind
        obj.api_version = obj.api_version or self.resource_type.api_version
        return obj
