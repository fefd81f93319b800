"""Base manager for Kubernetes bootstrap services.

Provides shared infrastructure for the bootstrap services, including client
access, wait timing, and error translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from flux_bootstrap.integrations.kubernetes.config import BootstrapDefaultsConfig

if TYPE_CHECKING:
    from flux_bootstrap.integrations.kubernetes.client import KubernetesClient
    from flux_bootstrap.integrations.kubernetes.exceptions import KubernetesError

logger = structlog.get_logger()


class K8sBaseManager:
    """Base class for Kubernetes bootstrap services.

    Provides shared concerns for all services:
    - Client reference
    - Timeout and poll interval for bounded waits
    - Structured logging with entity binding
    - Consistent API error translation

    Subclasses set ``_entity_name`` for structured log context.

    Example:
        >>> class ReadinessGate(K8sBaseManager):
        ...     _entity_name = "discovery"
    """

    _entity_name: str = ""

    def __init__(
        self,
        client: KubernetesClient,
        defaults: BootstrapDefaultsConfig | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            client: Kubernetes API client instance.
            defaults: Wait timing; library defaults when omitted.
        """
        self._client = client
        self._defaults = defaults or BootstrapDefaultsConfig()
        self._log = logger.bind(entity=self._entity_name)

    @property
    def timeout(self) -> float:
        """Seconds each bounded wait may take."""
        return self._defaults.api_timeout

    @property
    def poll_interval(self) -> float:
        """Seconds between probes."""
        return self._defaults.poll_interval

    def _translate(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate an API exception into a KubernetesError.

        Args:
            e: The original exception (typically ApiException).
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        return self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
