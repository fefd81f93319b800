"""Execution context carrying a deadline and cooperative cancellation.

A context is handed down through every stage of a bootstrap run. Waiting
code sleeps through :meth:`ExecutionContext.sleep`, which returns early and
raises as soon as the context is cancelled or its deadline passes, so a
cancelled run stops at the next tick boundary rather than mid-request.

Example:
    >>> ctx = ExecutionContext.background()
    >>> with ctx.with_timeout(5.0) as wait_ctx:
    ...     wait_ctx.sleep(0.01)
"""

from __future__ import annotations

import threading
import time
from typing import Any


class ContextDoneError(Exception):
    """Base for errors reported by a finished context."""


class ContextCancelledError(ContextDoneError):
    """The context was cancelled explicitly."""

    def __init__(self, message: str = "context cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(ContextDoneError):
    """The context deadline elapsed."""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class ExecutionContext:
    """Deadline plus cancellation token scoped to one invocation.

    Children created with :meth:`with_timeout` inherit their parent's
    deadline (never extending it) and are cancelled when the parent is.
    Cancelling a child leaves the parent untouched.
    """

    def __init__(
        self,
        deadline: float | None = None,
        parent: ExecutionContext | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            deadline: Absolute ``time.monotonic()`` value after which the
                context is done, or None for no deadline.
            parent: Context this one derives from.
        """
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline
        self._parent = parent
        self._cancelled = threading.Event()
        self._children: set[ExecutionContext] = set()
        self._lock = threading.Lock()
        if parent is not None:
            parent._attach(self)

    @classmethod
    def background(cls) -> ExecutionContext:
        """Return a fresh context with no deadline."""
        return cls()

    @property
    def deadline(self) -> float | None:
        """Absolute monotonic deadline, if any."""
        return self._deadline

    def with_timeout(self, seconds: float) -> ExecutionContext:
        """Derive a child context that expires ``seconds`` from now."""
        return ExecutionContext(deadline=time.monotonic() + seconds, parent=self)

    def _attach(self, child: ExecutionContext) -> None:
        with self._lock:
            self._children.add(child)
            cancelled = self._cancelled.is_set()
        if cancelled:
            child.cancel()

    def _detach(self, child: ExecutionContext) -> None:
        with self._lock:
            self._children.discard(child)

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        self._cancelled.set()
        with self._lock:
            children = list(self._children)
        for child in children:
            child.cancel()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def error(self) -> ContextDoneError | None:
        """Return why the context is done, or None while it is live."""
        if self._cancelled.is_set():
            return ContextCancelledError()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError()
        return None

    def done(self) -> bool:
        """Whether the context has been cancelled or has expired."""
        return self.error() is not None

    def raise_if_done(self) -> None:
        """Raise the context error if the context is done."""
        err = self.error()
        if err is not None:
            raise err

    def sleep(self, seconds: float) -> None:
        """Block for one tick, waking early on cancellation or deadline.

        Raises:
            ContextCancelledError: If the context was cancelled.
            DeadlineExceededError: If the deadline passed while sleeping.
        """
        self.raise_if_done()
        end = time.monotonic() + seconds
        while True:
            timeout = end - time.monotonic()
            remaining = self.remaining()
            if remaining is not None:
                timeout = min(timeout, remaining)
            if timeout <= 0:
                break
            self._cancelled.wait(timeout)
            self.raise_if_done()
        self.raise_if_done()

    def __enter__(self) -> ExecutionContext:
        return self

    def __exit__(self, *args: Any) -> None:
        self.cancel()
        if self._parent is not None:
            self._parent._detach(self)
