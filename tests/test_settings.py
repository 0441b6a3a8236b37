from __future__ import annotations

from odh_lint.config.settings import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("ODH_LINT_MAX_WORKERS", "ODH_LINT_TIMEOUT", "ODH_LINT_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.max_workers == 8
    assert s.timeout_seconds == 600
    assert s.request_timeout == 30
    assert s.default_output in s.output_formats


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("ODH_LINT_MAX_WORKERS", "3")
    monkeypatch.setenv("ODH_LINT_TIMEOUT", "bogus")
    monkeypatch.setenv("ODH_LINT_REQUEST_TIMEOUT", "-1")
    s = Settings()
    assert s.max_workers == 3
    assert s.timeout_seconds == 600
    assert s.request_timeout == 30
