"""Kubernetes bootstrap services.

Provides the discovery readiness gate, the custom resource upsert engine,
the Flux resource manager and the orchestration entry point.
"""

from flux_bootstrap.services.kubernetes.bootstrap import (
    BootstrapStage,
    reconcile_bootstrap,
)
from flux_bootstrap.services.kubernetes.flux_manager import (
    FluxBootstrapManager,
    build_flux_instance,
)
from flux_bootstrap.services.kubernetes.readiness import DiscoveryReadinessGate
from flux_bootstrap.services.kubernetes.upsert import ResourceUpsertEngine

__all__ = [
    "BootstrapStage",
    "DiscoveryReadinessGate",
    "FluxBootstrapManager",
    "ResourceUpsertEngine",
    "build_flux_instance",
    "reconcile_bootstrap",
]
