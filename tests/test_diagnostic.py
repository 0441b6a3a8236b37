from __future__ import annotations

import pytest

from odh_lint.core.errors import InvalidConditionError, InvalidResultError
from odh_lint.models.condition import (
    TYPE_AVAILABLE,
    TYPE_COMPATIBLE,
    TYPE_CONFIGURED,
    TYPE_VALIDATED,
    Condition,
    ConditionStatus,
    Impact,
    Severity,
    new_condition,
)
from odh_lint.models.diagnostic import (
    STATUS_ERROR,
    STATUS_FAIL,
    STATUS_PASS,
    STATUS_UNKNOWN,
    DiagnosticResultList,
    ImpactedObject,
    is_valid_annotation_key,
    new_result,
)


def _passing() -> Condition:
    return new_condition(TYPE_VALIDATED, ConditionStatus.TRUE, message="ok")


@pytest.mark.parametrize(
    "key,valid",
    [
        ("openshiftai.io/version", True),
        ("component.opendatahub.io/management-state", True),
        ("version", False),
        ("openshiftai/version", False),
        ("openshiftai.io/", False),
        ("/version", False),
        ("a.io/b/c", False),
    ],
)
def test_annotation_key_format(key, valid) -> None:
    assert is_valid_annotation_key(key) is valid


def test_new_result_starts_empty() -> None:
    dr = new_result("component", "codeflare", "removal", "desc")
    assert dr.annotations == {}
    assert dr.conditions == []
    assert dr.impacted_objects == []
    assert dr.status_string == STATUS_UNKNOWN
    assert dr.severity is None
    assert dr.impact is None
    assert dr.message == ""


@pytest.mark.parametrize(
    "group,kind,name,needle",
    [
        ("", "k", "n", "group"),
        ("g", "", "n", "kind"),
        ("g", "k", "", "name"),
    ],
)
def test_validate_rejects_empty_identity(group, kind, name, needle) -> None:
    dr = new_result(group, kind, name)
    dr.set_condition(_passing())
    with pytest.raises(InvalidResultError, match=needle):
        dr.validate()


def test_validate_rejects_bad_annotation_key() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.annotations["version"] = "3.0"
    dr.set_condition(_passing())
    with pytest.raises(InvalidResultError, match="domain/key"):
        dr.validate()


def test_validate_requires_a_condition() -> None:
    dr = new_result("component", "codeflare", "removal")
    with pytest.raises(InvalidResultError, match="at least one condition"):
        dr.validate()


def test_validate_reports_first_violation_in_order() -> None:
    # Both the kind and the annotations are invalid; kind is checked first.
    dr = new_result("component", "", "removal")
    dr.annotations["bad"] = "x"
    with pytest.raises(InvalidResultError, match="kind"):
        dr.validate()


def test_validate_wraps_condition_errors() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.conditions.append(Condition(type=TYPE_VALIDATED, status=ConditionStatus.TRUE, reason=""))
    with pytest.raises(InvalidResultError) as exc_info:
        dr.validate()
    assert isinstance(exc_info.value.__cause__, InvalidConditionError)


def test_validate_rejects_non_string_annotation_key() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.annotations[42] = "v"
    dr.set_condition(_passing())
    with pytest.raises(InvalidResultError, match="domain/key"):
        dr.validate()


def test_validate_rejects_foreign_condition_entries() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.set_condition(_passing())
    dr.conditions.append({"type": "Validated"})
    with pytest.raises(InvalidResultError, match="Condition objects, got dict"):
        dr.validate()


def test_set_condition_replaces_same_type_in_place() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.set_condition(new_condition(TYPE_AVAILABLE, ConditionStatus.TRUE))
    dr.set_condition(new_condition(TYPE_COMPATIBLE, ConditionStatus.TRUE))
    dr.set_condition(new_condition(TYPE_AVAILABLE, ConditionStatus.FALSE, message="gone"))

    assert [c.type for c in dr.conditions] == [TYPE_AVAILABLE, TYPE_COMPATIBLE]
    assert dr.conditions[0].status is ConditionStatus.FALSE
    assert dr.message == "gone"


def test_aggregate_severity_and_impact_take_the_worst() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.set_condition(new_condition(TYPE_AVAILABLE, ConditionStatus.TRUE))
    assert dr.severity is Severity.INFO
    assert dr.impact is Impact.NONE

    dr.set_condition(new_condition(TYPE_CONFIGURED, ConditionStatus.UNKNOWN))
    assert dr.severity is Severity.WARNING
    assert dr.impact is Impact.ADVISORY

    dr.set_condition(new_condition(TYPE_COMPATIBLE, ConditionStatus.FALSE, impact=Impact.BLOCKING))
    assert dr.severity is Severity.CRITICAL
    assert dr.impact is Impact.BLOCKING


def test_status_string_uses_first_non_true_condition() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.set_condition(new_condition(TYPE_AVAILABLE, ConditionStatus.TRUE))
    assert dr.status_string == STATUS_PASS
    assert not dr.is_failing

    dr.set_condition(new_condition(TYPE_CONFIGURED, ConditionStatus.UNKNOWN))
    dr.set_condition(new_condition(TYPE_COMPATIBLE, ConditionStatus.FALSE))
    assert dr.status_string == STATUS_ERROR
    assert dr.is_failing

    dr2 = new_result("component", "codeflare", "removal")
    dr2.set_condition(new_condition(TYPE_COMPATIBLE, ConditionStatus.FALSE))
    dr2.set_condition(new_condition(TYPE_CONFIGURED, ConditionStatus.UNKNOWN))
    assert dr2.status_string == STATUS_FAIL


def test_remediation_comes_from_a_failing_condition() -> None:
    dr = new_result("component", "codeflare", "removal")
    dr.set_condition(new_condition(TYPE_AVAILABLE, ConditionStatus.TRUE, remediation="not shown"))
    assert dr.remediation == ""
    dr.set_condition(new_condition(TYPE_COMPATIBLE, ConditionStatus.FALSE, remediation="disable it"))
    assert dr.remediation == "disable it"


def test_impacted_object_from_resource() -> None:
    obj = ImpactedObject.from_resource({
        "apiVersion": "workload.codeflare.dev/v1beta2",
        "kind": "AppWrapper",
        "metadata": {"name": "job-1", "namespace": "team-a"},
    })
    assert obj.display_name == "team-a/job-1 (AppWrapper)"
    assert obj.to_dict() == {
        "apiVersion": "workload.codeflare.dev/v1beta2",
        "kind": "AppWrapper",
        "metadata": {"name": "job-1", "namespace": "team-a"},
    }


def test_result_list_serialization() -> None:
    dr = new_result("component", "codeflare", "removal", "desc")
    dr.annotations["check.opendatahub.io/target-version"] = "3.0.0"
    dr.set_condition(_passing())
    dr.impacted_objects.append(ImpactedObject(kind="AppWrapper", name="a", namespace="ns"))

    data = DiagnosticResultList(cluster_version="2.16.0", target_version="3.0.0", results=[dr]).to_dict()

    assert data["clusterVersion"] == "2.16.0"
    assert data["targetVersion"] == "3.0.0"
    result = data["results"][0]
    assert result["group"] == "component"
    assert result["spec"] == {"description": "desc"}
    assert result["annotations"] == {"check.opendatahub.io/target-version": "3.0.0"}
    assert result["status"]["conditions"][0]["status"] == "True"
    assert result["impactedObjects"][0]["metadata"] == {"name": "a", "namespace": "ns"}
