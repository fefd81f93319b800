"""Flux bootstrap resources.

Derives the ``FluxInstance`` the bootstrap owns from cluster configuration,
and patches the ``OCIRepository`` the Flux operator creates in response so
it can pull from a plain-HTTP in-cluster registry.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from flux_bootstrap.integrations.kubernetes.config import (
    DEFAULT_ENDPOINT_HOST,
    LOCAL_REGISTRY_CLUSTER_HOST,
    LOCAL_REGISTRY_CLUSTER_PORT,
)
from flux_bootstrap.integrations.kubernetes.exceptions import (
    DependentTimeoutError,
    KubernetesNotFoundError,
    ReconciliationError,
)
from flux_bootstrap.integrations.kubernetes.models.base import ObjectMeta
from flux_bootstrap.integrations.kubernetes.models.flux import (
    Distribution,
    FluxInstance,
    FluxInstanceSpec,
    OCIRepository,
    Sync,
)
from flux_bootstrap.services.kubernetes.base import K8sBaseManager
from flux_bootstrap.utils.durations import format_duration
from flux_bootstrap.utils.naming import sanitize_name
from flux_bootstrap.utils.polling import PollTimeoutError, poll_until

if TYPE_CHECKING:
    from flux_bootstrap.core.context import ExecutionContext
    from flux_bootstrap.integrations.kubernetes.config import ClusterConfig

# =============================================================================
# Well-known Objects
# =============================================================================

FLUX_NAMESPACE = "flux-system"
FLUX_INSTANCE_NAME = "flux"
OCI_REPOSITORY_NAME = FLUX_NAMESPACE

# =============================================================================
# Desired State Defaults
# =============================================================================

DEFAULT_PROJECT_NAME = "flux-workloads"
DEFAULT_SOURCE_DIRECTORY = "k8s"
DEFAULT_ARTIFACT_TAG = "latest"
FLUX_INTERVAL_FALLBACK = timedelta(minutes=1)

FLUX_DISTRIBUTION_VERSION = "2.x"
FLUX_DISTRIBUTION_REGISTRY = "ghcr.io/fluxcd"
FLUX_DISTRIBUTION_ARTIFACT = "oci://ghcr.io/controlplaneio-fluxcd/flux-operator-manifests:latest"

SYNC_PROVIDER = "generic"
# Flux resolves sync paths against the root of the unpacked artifact.
SYNC_PATH = "./"


def build_flux_instance(cluster_config: ClusterConfig) -> FluxInstance:
    """Derive the desired FluxInstance from cluster configuration.

    Args:
        cluster_config: Cluster settings.

    Returns:
        The FluxInstance to upsert. Its sync URL is always
        ``oci://<host>:<port>/<project>``; with the local registry enabled
        the in-cluster registry address is used and the host port ignored.
    """
    interval = cluster_config.flux_interval
    if interval <= timedelta(0):
        interval = FLUX_INTERVAL_FALLBACK

    source_dir = cluster_config.source_directory.strip() or DEFAULT_SOURCE_DIRECTORY
    project_name = sanitize_name(source_dir, DEFAULT_PROJECT_NAME)

    if cluster_config.local_registry_enabled:
        repo_host = LOCAL_REGISTRY_CLUSTER_HOST
        repo_port = LOCAL_REGISTRY_CLUSTER_PORT
    else:
        repo_host = DEFAULT_ENDPOINT_HOST
        repo_port = cluster_config.resolved_host_port()

    return FluxInstance(
        metadata=ObjectMeta(name=FLUX_INSTANCE_NAME, namespace=FLUX_NAMESPACE),
        spec=FluxInstanceSpec(
            distribution=Distribution(
                version=FLUX_DISTRIBUTION_VERSION,
                registry=FLUX_DISTRIBUTION_REGISTRY,
                artifact=FLUX_DISTRIBUTION_ARTIFACT,
            ),
            sync=Sync(
                kind=OCIRepository.KIND,
                url=f"oci://{repo_host}:{repo_port}/{project_name}",
                ref=DEFAULT_ARTIFACT_TAG,
                path=SYNC_PATH,
                provider=SYNC_PROVIDER,
                interval=format_duration(interval),
            ),
        ),
    )


class FluxBootstrapManager(K8sBaseManager):
    """Manager for the operator-created Flux source object."""

    _entity_name = "flux"

    def get_oci_repository(
        self,
        name: str = OCI_REPOSITORY_NAME,
        namespace: str = FLUX_NAMESPACE,
    ) -> OCIRepository:
        """Get an OCIRepository by name.

        Raises:
            KubernetesError: Translated API error, e.g. KubernetesNotFoundError.
        """
        try:
            result = self._client.custom_objects.get_namespaced_custom_object(
                OCIRepository.GROUP,
                OCIRepository.VERSION,
                namespace,
                OCIRepository.PLURAL,
                name,
            )
        except Exception as e:
            raise self._translate(e, OCIRepository.KIND, name, namespace) from e
        return OCIRepository.from_k8s_object(result)

    def ensure_oci_repository_insecure(self, ctx: ExecutionContext) -> None:
        """Wait for the default OCIRepository and allow plain-HTTP pulls from it.

        Polls on the same tick-first schedule as the discovery gate, waiting
        only on not-found. Once the object exists it is updated only when
        ``spec.insecure`` is still false. The object is never created here.

        Args:
            ctx: Execution context; cancelling it ends the wait at the next tick.

        Raises:
            DependentTimeoutError: If the object did not appear in time.
            ReconciliationError: If reading or updating it failed.
        """
        name = OCI_REPOSITORY_NAME
        ns = FLUX_NAMESPACE
        self._log.debug("waiting_for_oci_repository", name=name, namespace=ns, timeout=self.timeout)

        with ctx.with_timeout(self.timeout) as wait_ctx:
            try:
                repo = poll_until(
                    wait_ctx,
                    lambda: self.get_oci_repository(name, ns),
                    interval=self.poll_interval,
                    retry_on=KubernetesNotFoundError,
                )
            except PollTimeoutError as e:
                raise DependentTimeoutError(
                    OCIRepository.KIND,
                    name,
                    ns,
                    timeout_seconds=self.timeout,
                ) from e.last_error
            except Exception as e:
                error = self._translate(e, OCIRepository.KIND, name, ns)
                raise ReconciliationError("get", error, OCIRepository.KIND, name, ns) from e

        if repo.spec.insecure:
            self._log.debug("oci_repository_already_insecure", name=name, namespace=ns)
            return

        repo.spec.insecure = True
        ctx.raise_if_done()
        try:
            self._client.custom_objects.replace_namespaced_custom_object(
                OCIRepository.GROUP,
                OCIRepository.VERSION,
                ns,
                OCIRepository.PLURAL,
                name,
                repo.to_k8s_object(),
            )
        except Exception as e:
            error = self._translate(e, OCIRepository.KIND, name, ns)
            raise ReconciliationError("update", error, OCIRepository.KIND, name, ns) from e

        self._log.info("marked_oci_repository_insecure", name=name, namespace=ns, url=repo.url)
