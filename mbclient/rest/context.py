"""Cancellation tokens threaded through outbound requests.

A :class:`Context` carries an optional deadline and a cancellation flag.
Children inherit both from their parent: cancelling a parent cancels every
context derived from it, and a child's deadline is never later than its
parent's.
"""

from __future__ import annotations

import threading
import time
from typing import Optional


class ContextError(Exception):
    """Base class for errors reported by a finished :class:`Context`."""


class Cancelled(ContextError):
    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DeadlineExceeded(ContextError):
    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class Context:
    """Cooperative cancellation token with an optional deadline."""

    def __init__(self, parent: Optional["Context"] = None, deadline: Optional[float] = None) -> None:
        self._parent = parent
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "Context":
        """Return a context with no deadline that nobody else can cancel."""
        return cls()

    @classmethod
    def with_cancel(cls, parent: Optional["Context"] = None) -> "Context":
        return cls(parent)

    @classmethod
    def with_timeout(cls, seconds: float, parent: Optional["Context"] = None) -> "Context":
        """Return a child context that expires ``seconds`` from now."""
        return cls(parent, deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        """Deadline as a :func:`time.monotonic` timestamp, or ``None``."""
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, clamped at zero."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> Optional[ContextError]:
        """Return why the context is done, or ``None`` while it is still live."""
        if self._cancelled.is_set():
            return Cancelled()
        if self._parent is not None:
            parent_err = self._parent.err()
            if parent_err is not None:
                return parent_err
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded()
        return None

    def done(self) -> bool:
        return self.err() is not None

    def raise_if_done(self) -> None:
        err = self.err()
        if err is not None:
            raise err
