"""Tick-first polling on top of tenacity.

Both bootstrap waits share one shape: sleep one interval, probe, and keep
probing once per interval until the probe stops raising or the execution
context is done. tenacity drives the attempts while the context's
:meth:`~flux_bootstrap.core.context.ExecutionContext.sleep` acts as the timer,
so cancellation and the deadline end the loop at the next tick boundary.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception_type, wait_fixed

from flux_bootstrap.core.context import ContextDoneError

if TYPE_CHECKING:
    from flux_bootstrap.core.context import ExecutionContext

T = TypeVar("T")


class PollTimeoutError(Exception):
    """The context finished before the probe succeeded.

    Attributes:
        last_error: The last probe error, or the context's own error when
            no probe ever ran.
    """

    def __init__(self, last_error: BaseException) -> None:
        super().__init__(str(last_error))
        self.last_error = last_error


def poll_until(
    ctx: ExecutionContext,
    probe: Callable[[], T],
    *,
    interval: float,
    retry_on: type[BaseException] | tuple[type[BaseException], ...] = Exception,
) -> T:
    """Call ``probe`` once per tick until it returns.

    The first call happens only after one full ``interval`` has elapsed and
    each later call is preceded by exactly one more tick.

    Args:
        ctx: Context whose deadline and cancellation bound the wait.
        probe: Zero-argument callable; raising ``retry_on`` means "not yet".
        interval: Seconds per tick.
        retry_on: Exception types that trigger another attempt. Anything
            else propagates unchanged.

    Returns:
        Whatever ``probe`` returned on its first successful call.

    Raises:
        PollTimeoutError: If the context finished first.
    """
    last_error: BaseException | None = None

    def _record_failure(retry_state: RetryCallState) -> None:
        nonlocal last_error
        if retry_state.outcome is not None:
            last_error = retry_state.outcome.exception()

    try:
        ctx.sleep(interval)
        for attempt in Retrying(
            retry=retry_if_exception_type(retry_on),
            wait=wait_fixed(interval),
            sleep=ctx.sleep,
            before_sleep=_record_failure,
            reraise=True,
        ):
            with attempt:
                return probe()
    except ContextDoneError as exc:
        cause = last_error or exc
        raise PollTimeoutError(cause) from cause

    raise RuntimeError("poll loop ended without a result")
