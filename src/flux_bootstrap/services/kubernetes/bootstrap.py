"""Flux bootstrap orchestration.

Runs the full sequence that takes a freshly provisioned cluster with the
Flux operator installed to one syncing from the workload OCI artifact:

1. build a client from the kubeconfig
2. wait for the FluxInstance API
3. upsert the FluxInstance derived from cluster configuration
4. wait for the source-controller API
5. with the local registry enabled, mark the default OCIRepository insecure

Each step runs only after the previous one succeeded; nothing is rolled
back on failure, and re-running the whole sequence is safe.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

import structlog

from flux_bootstrap.core.context import ExecutionContext
from flux_bootstrap.integrations.kubernetes.client import KubernetesClient
from flux_bootstrap.integrations.kubernetes.config import (
    BootstrapDefaultsConfig,
    ClusterConfig,
)
from flux_bootstrap.integrations.kubernetes.exceptions import BootstrapConfigError
from flux_bootstrap.integrations.kubernetes.models.flux import FluxInstance, OCIRepository
from flux_bootstrap.services.kubernetes.flux_manager import (
    FluxBootstrapManager,
    build_flux_instance,
)
from flux_bootstrap.services.kubernetes.readiness import DiscoveryReadinessGate
from flux_bootstrap.services.kubernetes.upsert import ResourceUpsertEngine

logger = structlog.get_logger()

ClientFactory = Callable[[str], KubernetesClient]


class BootstrapStage(StrEnum):
    """Linear stages of a bootstrap run."""

    INIT = "init"
    CLIENT_READY = "client_ready"
    PRIMARY_API_READY = "primary_api_ready"
    UPSERTED = "upserted"
    SECONDARY_API_READY = "secondary_api_ready"
    PATCHED = "patched"
    SKIPPED = "skipped"
    DONE = "done"


def reconcile_bootstrap(
    ctx: ExecutionContext | None,
    kubeconfig: str,
    cluster_config: ClusterConfig | None,
    *,
    client_factory: ClientFactory = KubernetesClient,
    defaults: BootstrapDefaultsConfig | None = None,
) -> None:
    """Ensure the default FluxInstance exists and is wired to the workload artifact.

    Args:
        ctx: Execution context bounding the run; a background context is
            used when None.
        kubeconfig: Path to the cluster's kubeconfig.
        cluster_config: Cluster settings the FluxInstance is derived from.
        client_factory: Builds the cluster client from the kubeconfig path.
        defaults: Wait timing; read from the environment when omitted.

    Raises:
        BootstrapConfigError: If ``cluster_config`` is None or the kubeconfig
            path is blank.
        KubernetesConnectionError: If the client cannot be built.
        ReadinessTimeoutError: If a required API is not served in time.
        ReconciliationError: If the FluxInstance or OCIRepository cannot be
            written.
        UnsupportedResourceError: If a kind without spec-copy support
            reaches the upsert engine.
        DependentTimeoutError: If the operator never creates the
            OCIRepository.
    """
    if cluster_config is None:
        raise BootstrapConfigError("cluster configuration is required")

    if ctx is None:
        ctx = ExecutionContext.background()

    defaults = defaults or BootstrapDefaultsConfig.from_env()
    log = logger.bind(entity="bootstrap")

    try:
        client = client_factory(kubeconfig)
    except Exception as e:
        log.error("bootstrap_failed", stage=BootstrapStage.INIT.value, error=str(e))
        raise

    try:
        _run_stages(ctx, client, cluster_config, defaults, log)
    finally:
        client.close()


def _run_stages(
    ctx: ExecutionContext,
    client: KubernetesClient,
    cluster_config: ClusterConfig,
    defaults: BootstrapDefaultsConfig,
    log: Any,
) -> None:
    stage = _advance(log, BootstrapStage.CLIENT_READY)
    try:
        gate = DiscoveryReadinessGate(client, defaults)
        gate.wait_for_group_version(ctx, FluxInstance.group_version())
        stage = _advance(log, BootstrapStage.PRIMARY_API_READY)

        desired = build_flux_instance(cluster_config)
        ResourceUpsertEngine(client, defaults).upsert(ctx, desired, FluxInstance, FluxInstance.KIND)
        stage = _advance(log, BootstrapStage.UPSERTED)

        gate.wait_for_group_version(ctx, OCIRepository.group_version())
        stage = _advance(log, BootstrapStage.SECONDARY_API_READY)

        if cluster_config.local_registry_enabled:
            FluxBootstrapManager(client, defaults).ensure_oci_repository_insecure(ctx)
            stage = _advance(log, BootstrapStage.PATCHED)
        else:
            stage = _advance(log, BootstrapStage.SKIPPED)
    except Exception as e:
        log.error("bootstrap_failed", stage=stage.value, error=str(e))
        raise

    _advance(log, BootstrapStage.DONE)


def _advance(log: Any, stage: BootstrapStage) -> BootstrapStage:
    log.info("bootstrap_stage", stage=stage.value)
    return stage
