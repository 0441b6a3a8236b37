"""Cancellation and deadline propagation for a lint run."""

from __future__ import annotations

import threading
import time


class RunContext:
    """Carries cancellation and an optional deadline through a run.

    Checks receive the context so they can stop early; the executor consults it
    before dispatching each check. A child context created with ``with_timeout``
    is cancelled whenever its parent is.
    """

    def __init__(self, deadline: float | None = None, parent: RunContext | None = None):
        self._cancelled = threading.Event()
        self._deadline = deadline
        self._parent = parent

    @classmethod
    def background(cls) -> RunContext:
        return cls()

    def with_timeout(self, seconds: float) -> RunContext:
        deadline = time.monotonic() + seconds
        if self._deadline is not None:
            deadline = min(deadline, self._deadline)
        return RunContext(deadline=deadline, parent=self)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def is_cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return True
        return self._parent is not None and self._parent.is_cancelled()

    @property
    def reason(self) -> str:
        if self._cancelled.is_set():
            return "context cancelled"
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return "context deadline exceeded"
        if self._parent is not None:
            return self._parent.reason
        return ""
