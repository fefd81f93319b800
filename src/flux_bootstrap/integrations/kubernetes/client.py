"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client around a single kubeconfig file,
giving the bootstrap one handle for both custom-object CRUD and API
discovery, with lazy API group initialization and consistent error
translation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from flux_bootstrap.integrations.kubernetes.exceptions import (
    BootstrapConfigError,
    KubernetesAlreadyExistsError,
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import ApiClient, CoreV1Api, CustomObjectsApi

logger = structlog.get_logger()

ALREADY_EXISTS_REASON = "AlreadyExists"


class KubernetesClient:
    """Kubernetes API client bound to one kubeconfig.

    Each instance owns its own ``ApiClient`` instead of mutating the
    library's global default configuration, so two bootstraps against
    different clusters never share connection state.

    Example:
        ```python
        from flux_bootstrap.integrations.kubernetes import KubernetesClient

        with KubernetesClient("~/.kube/config") as client:
            client.server_resources_for_group_version("source.toolkit.fluxcd.io/v1")
        ```
    """

    def __init__(self, kubeconfig: str, context: str | None = None) -> None:
        """Initialize the client from a kubeconfig file.

        Args:
            kubeconfig: Path to the kubeconfig file.
            context: Context to use, or None for the file's current context.

        Raises:
            BootstrapConfigError: If the kubeconfig path is blank.
            KubernetesConnectionError: If the kubeconfig cannot be loaded.
        """
        if not kubeconfig or not kubeconfig.strip():
            raise BootstrapConfigError("kubeconfig path is required")

        self._kubeconfig = str(Path(kubeconfig.strip()).expanduser())
        self._context = context

        self._api_client: ApiClient | None = None
        self._custom_objects: CustomObjectsApi | None = None
        self._core_v1: CoreV1Api | None = None

        self._load_config()

        logger.info(
            "Kubernetes client initialized",
            kubeconfig=self._kubeconfig,
            context=self._context,
        )

    def _load_config(self) -> None:
        """Build a dedicated ApiClient from the kubeconfig file.

        Any failure while reading or interpreting the file, including YAML
        syntax errors and a malformed structure, is reported as a
        KubernetesConnectionError.
        """
        from kubernetes import config

        try:
            self._api_client = config.new_client_from_config(
                config_file=self._kubeconfig,
                context=self._context,
            )
        except Exception as e:
            raise KubernetesConnectionError(
                message=f"Failed to load kubeconfig {self._kubeconfig}",
                original_error=e,
            ) from e

        logger.debug("loaded_kubeconfig", kubeconfig=self._kubeconfig, context=self._context)

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """Get CustomObjectsApi instance (CRD-backed resources)."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi(self._api_client)
        return self._custom_objects

    @property
    def core_v1(self) -> CoreV1Api:
        """Get CoreV1Api instance (used for core group discovery)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api(self._api_client)
        return self._core_v1

    # =========================================================================
    # Discovery
    # =========================================================================

    def server_resources_for_group_version(self, group_version: str) -> Any:
        """Fetch the resource list the API server serves for a group/version.

        Args:
            group_version: ``group/version`` string, or a bare version for
                the core group.

        Returns:
            The ``V1APIResourceList`` reported by the server.

        Raises:
            KubernetesError: If the group/version is not served (typically
                a ``KubernetesNotFoundError``) or the server is unreachable.
        """
        group, _, version = group_version.rpartition("/")
        try:
            if not group:
                return self.core_v1.get_api_resources()
            return self.custom_objects.get_api_resources(group, version)
        except Exception as e:
            raise self.translate_api_exception(
                e,
                resource_type="APIGroupVersion",
                resource_name=group_version,
            ) from e

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def _status_reason(e: Any) -> str | None:
        """Return the ``Status.reason`` from an ApiException body, if any."""
        body = getattr(e, "body", None)
        if body:
            try:
                payload = json.loads(body)
            except (TypeError, ValueError):
                payload = None
            if isinstance(payload, dict) and payload.get("reason"):
                return str(payload["reason"])
        return getattr(e, "reason", None)

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes ApiException to a custom exception.

        Args:
            e: The original exception.
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass. Errors that already
            are KubernetesError instances are returned as-is.
        """
        from kubernetes.client import ApiException

        if isinstance(e, KubernetesError):
            return e

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=str(e) or type(e).__name__,
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status == 409:
            if KubernetesClient._status_reason(e) == ALREADY_EXISTS_REASON:
                return KubernetesAlreadyExistsError(
                    resource_type=resource_type,
                    resource_name=resource_name,
                    namespace=namespace,
                )
            return KubernetesConflictError(
                message=e.reason or "Resource conflict",
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=e.reason or "Validation failed",
                status_code=status,
            )

        return KubernetesError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release pooled connections."""
        if self._api_client is not None:
            self._api_client.close()
        self._custom_objects = None
        self._core_v1 = None
        logger.debug("Kubernetes client closed")

    def __enter__(self) -> KubernetesClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
