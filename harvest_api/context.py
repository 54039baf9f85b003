"""Cancellation and deadlines for client calls.

A Context is owned by the caller and passed to every operation. It is checked
before each request is issued; a request already in flight is not aborted,
but its timeout is capped by the remaining deadline.
"""

import threading
import time

from .errors import DeadlineExceeded, RequestCancelled


class Context:
    """Cancellable, optionally time-limited scope for one or more calls."""

    def __init__(self, timeout: float | None = None):
        self._cancelled = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def with_deadline(cls, deadline: float) -> "Context":
        """Create a context expiring at ``deadline`` (a ``time.monotonic()`` value)."""
        ctx = cls()
        ctx._deadline = deadline
        return ctx

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        return self.err() is not None

    def err(self) -> RequestCancelled | None:
        """The error describing why the context is done, if it is."""
        if self._cancelled.is_set():
            return RequestCancelled("context canceled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded("context deadline exceeded")
        return None

    def raise_if_done(self) -> None:
        err = self.err()
        if err is not None:
            raise err


def background() -> Context:
    """A fresh context that is not cancelled and has no deadline."""
    return Context()
