"""Discovery readiness gate.

Blocks until the API server serves a given ``group/version``. CRDs installed
moments earlier by an operator or chart are not discoverable straight away,
and creating a custom object before then fails with a 404.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flux_bootstrap.integrations.kubernetes.exceptions import ReadinessTimeoutError
from flux_bootstrap.services.kubernetes.base import K8sBaseManager
from flux_bootstrap.utils.polling import PollTimeoutError, poll_until

if TYPE_CHECKING:
    from flux_bootstrap.core.context import ExecutionContext


class DiscoveryReadinessGate(K8sBaseManager):
    """Polls API discovery until a group/version is served."""

    _entity_name = "discovery"

    def wait_for_group_version(self, ctx: ExecutionContext, group_version: str) -> None:
        """Wait until ``group_version`` is served or the wait expires.

        The wait is bounded by the configured timeout and by ``ctx``. The
        first probe runs one poll interval after the call; every failed
        probe, whatever the error, is retried on the next tick.

        Args:
            ctx: Execution context; cancelling it ends the wait at the next tick.
            group_version: ``group/version`` to wait for.

        Raises:
            ReadinessTimeoutError: If the group/version was not served in
                time. Chains the last probe error, or the context error
                when no probe ran.
        """
        self._log.debug(
            "waiting_for_api",
            group_version=group_version,
            timeout=self.timeout,
            poll_interval=self.poll_interval,
        )

        with ctx.with_timeout(self.timeout) as wait_ctx:
            try:
                poll_until(
                    wait_ctx,
                    lambda: self._client.server_resources_for_group_version(group_version),
                    interval=self.poll_interval,
                )
            except PollTimeoutError as e:
                self._log.warning(
                    "api_not_served",
                    group_version=group_version,
                    error=str(e.last_error),
                )
                raise ReadinessTimeoutError(
                    group_version,
                    last_error=e.last_error,
                    timeout_seconds=self.timeout,
                ) from e.last_error

        self._log.info("api_served", group_version=group_version)
