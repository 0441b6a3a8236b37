"""Error types and classification of check execution failures."""

from __future__ import annotations

import enum
import socket
from dataclasses import dataclass

from kubernetes.client import ApiException
from urllib3.exceptions import MaxRetryError, NewConnectionError, ProtocolError
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError


class LintError(Exception):
    """Base class for all odh-lint errors."""


class DuplicateCheckError(LintError):
    """A check with the same ID is already registered."""

    def __init__(self, check_id: str):
        super().__init__(f"check with ID {check_id} already registered")
        self.check_id = check_id


class InvalidPatternError(LintError):
    """A check selector is not a well-formed glob pattern."""

    def __init__(self, pattern: str, detail: str = ""):
        msg = f"invalid pattern {pattern!r}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.pattern = pattern


class SelectionError(LintError):
    """Resolving a selector to a set of checks failed."""


class InvalidConditionError(LintError, ValueError):
    """A condition violates the result schema."""


class InvalidResultError(LintError, ValueError):
    """A diagnostic result violates the result schema."""


class VersionDetectionError(LintError):
    """The cluster version could not be determined."""


class ErrorKind(enum.Enum):
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ErrorClassification:
    kind: ErrorKind
    reason: str
    remediation: str


_CLASSIFICATIONS: dict[ErrorKind, ErrorClassification] = {
    ErrorKind.FORBIDDEN: ErrorClassification(
        kind=ErrorKind.FORBIDDEN,
        reason="APIAccessDenied",
        remediation=(
            "Insufficient permissions to access cluster resources. "
            "Ensure your ServiceAccount or user has the required RBAC permissions "
            "(get, list on the resource types being checked). "
            "Contact your cluster administrator to grant access."
        ),
    ),
    ErrorKind.UNAUTHORIZED: ErrorClassification(
        kind=ErrorKind.UNAUTHORIZED,
        reason="Unauthorized",
        remediation=(
            "The cluster rejected the request credentials. "
            "Log in again (e.g. 'oc login') or refresh the kubeconfig token."
        ),
    ),
    ErrorKind.TIMEOUT: ErrorClassification(
        kind=ErrorKind.TIMEOUT,
        reason="Timeout",
        remediation=(
            "Request timed out. Check network connectivity to the cluster API server. "
            "Verify the cluster is responsive and not overloaded."
        ),
    ),
    ErrorKind.UNAVAILABLE: ErrorClassification(
        kind=ErrorKind.UNAVAILABLE,
        reason="ServiceUnavailable",
        remediation=(
            "API server is unavailable or overloaded. Wait a few moments and try again. "
            "If the issue persists, check cluster health with 'kubectl get nodes' "
            "and 'kubectl get pods -n kube-system'."
        ),
    ),
    ErrorKind.UNCLASSIFIED: ErrorClassification(
        kind=ErrorKind.UNCLASSIFIED,
        reason="CheckExecutionFailed",
        remediation=(
            "Check the error message and ensure you have proper access "
            "to the cluster resources."
        ),
    ),
}

_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    408: ErrorKind.TIMEOUT,
    429: ErrorKind.UNAVAILABLE,
    503: ErrorKind.UNAVAILABLE,
    504: ErrorKind.TIMEOUT,
}


def _error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ApiException):
        return _STATUS_KINDS.get(exc.status or 0, ErrorKind.UNCLASSIFIED)
    # NewConnectionError subclasses urllib3's ConnectTimeoutError; test it first.
    if isinstance(exc, (NewConnectionError, ProtocolError, ConnectionError)):
        return ErrorKind.UNAVAILABLE
    if isinstance(exc, (TimeoutError, socket.timeout, Urllib3TimeoutError)):
        return ErrorKind.TIMEOUT
    if isinstance(exc, MaxRetryError):
        reason = exc.reason
        if isinstance(reason, Urllib3TimeoutError) and not isinstance(reason, NewConnectionError):
            return ErrorKind.TIMEOUT
        return ErrorKind.UNAVAILABLE
    return ErrorKind.UNCLASSIFIED


def classify_error(exc: BaseException) -> ErrorClassification:
    """Classify *exc* into the fixed failure taxonomy.

    Wrapped errors are unwrapped through ``__cause__`` so that a check raising
    ``RuntimeError(...) from ApiException(403)`` is still reported as forbidden.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        kind = _error_kind(current)
        if kind is not ErrorKind.UNCLASSIFIED:
            return _CLASSIFICATIONS[kind]
        current = current.__cause__
    return _CLASSIFICATIONS[ErrorKind.UNCLASSIFIED]


def is_not_found(exc: BaseException) -> bool:
    return isinstance(exc, ApiException) and exc.status == 404
