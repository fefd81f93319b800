"""Core primitives shared across the bootstrap services."""

from flux_bootstrap.core.context import (
    ContextCancelledError,
    ContextDoneError,
    DeadlineExceededError,
    ExecutionContext,
)

__all__ = [
    "ContextCancelledError",
    "ContextDoneError",
    "DeadlineExceededError",
    "ExecutionContext",
]
