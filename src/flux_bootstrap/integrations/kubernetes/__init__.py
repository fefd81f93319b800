"""Kubernetes integration - API client, configuration models and errors."""

from flux_bootstrap.integrations.kubernetes.client import KubernetesClient
from flux_bootstrap.integrations.kubernetes.config import (
    BootstrapDefaultsConfig,
    ClusterConfig,
)
from flux_bootstrap.integrations.kubernetes.exceptions import (
    BootstrapConfigError,
    DependentTimeoutError,
    KubernetesAlreadyExistsError,
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
    ReadinessTimeoutError,
    ReconciliationError,
    UnsupportedResourceError,
)

__all__ = [
    "BootstrapConfigError",
    "BootstrapDefaultsConfig",
    "ClusterConfig",
    "DependentTimeoutError",
    "KubernetesAlreadyExistsError",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConflictError",
    "KubernetesConnectionError",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesTimeoutError",
    "KubernetesValidationError",
    "ReadinessTimeoutError",
    "ReconciliationError",
    "UnsupportedResourceError",
]
