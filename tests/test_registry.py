from __future__ import annotations

import pytest
from conftest import StubCheck

from odh_lint.core.errors import DuplicateCheckError, InvalidPatternError
from odh_lint.core.registry import CheckRegistry
from odh_lint.core.selector import compile_pattern, matches_pattern
from odh_lint.models import CheckGroup

IDS = ["components.dashboard", "components.workbench", "services.oauth", "workloads.limits"]


@pytest.fixture
def registry() -> CheckRegistry:
    reg = CheckRegistry()
    for check_id in IDS:
        reg.register(StubCheck(check_id))
    return reg


def _ids(checks) -> list[str]:
    return [c.check_id for c in checks]


def test_register_rejects_duplicate_id(registry: CheckRegistry) -> None:
    original = registry.get("services.oauth")
    with pytest.raises(DuplicateCheckError, match="services.oauth"):
        registry.register(StubCheck("services.oauth"))

    assert len(registry) == 4
    assert registry.get("services.oauth") is original
    assert _ids(registry.list_all()) == IDS


def test_must_register_reraises(registry: CheckRegistry) -> None:
    with pytest.raises(DuplicateCheckError):
        registry.must_register(StubCheck("components.dashboard"))


def test_lookup(registry: CheckRegistry) -> None:
    assert "components.dashboard" in registry
    assert registry.get("components.dashboard").check_id == "components.dashboard"
    assert registry.get("missing") is None
    assert _ids(registry.list_by_group(CheckGroup.SERVICE)) == ["services.oauth"]
    assert registry.list_by_group(CheckGroup.DEPENDENCY) == []


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("*", IDS),
        ("components", ["components.dashboard", "components.workbench"]),
        ("components.*", ["components.dashboard", "components.workbench"]),
        ("*.dashboard", ["components.dashboard"]),
        ("*dashboard*", ["components.dashboard"]),
        ("components.dashboard", ["components.dashboard"]),
        ("nonexistent.*", []),
        ("services", ["services.oauth"]),
        ("workloads", ["workloads.limits"]),
        ("dependencies", []),
        ("components.work?ench", ["components.workbench"]),
        ("components.[dw]*", ["components.dashboard", "components.workbench"]),
        ("components.[!d]*", ["components.workbench"]),
    ],
)
def test_list_by_pattern(registry: CheckRegistry, pattern: str, expected: list[str]) -> None:
    assert _ids(registry.list_by_pattern(pattern)) == expected


@pytest.mark.parametrize("pattern", ["[", "components.[dash", "components.[]", "trailing\\"])
def test_malformed_pattern_is_an_error(registry: CheckRegistry, pattern: str) -> None:
    with pytest.raises(InvalidPatternError, match="invalid pattern") as exc_info:
        registry.list_by_pattern(pattern)
    assert exc_info.value.__cause__ is not None


def test_malformed_pattern_fails_even_with_no_checks() -> None:
    with pytest.raises(InvalidPatternError):
        CheckRegistry().list_by_pattern("[")


def test_group_filter_narrows_selection(registry: CheckRegistry) -> None:
    assert _ids(registry.list_by_pattern("*", CheckGroup.COMPONENT)) == [
        "components.dashboard",
        "components.workbench",
    ]
    assert registry.list_by_pattern("services.*", CheckGroup.COMPONENT) == []


def test_list_by_patterns_is_a_deduplicated_union(registry: CheckRegistry) -> None:
    selected = registry.list_by_patterns(["workloads", "components.dashboard", "*dash*"])
    assert _ids(selected) == ["components.dashboard", "workloads.limits"]


def test_escaped_glob_characters_match_literally() -> None:
    check = StubCheck("components.odd*name")
    assert matches_pattern(check, "components.odd\\*name")
    assert not matches_pattern(StubCheck("components.oddXname"), "components.odd\\*name")
    assert compile_pattern("a\\?b") == "a[?]b"


def test_exact_id_wins_over_glob_metacharacters() -> None:
    check = StubCheck("components.[x]")
    assert matches_pattern(check, "components.[x]")
