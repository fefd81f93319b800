"""Create-or-update for namespaced custom resources.

Creation is attempted first. Only an "already exists" rejection falls
through to a get followed by a full replace of the fetched object with the
desired spec copied in, so metadata and status on the server stay as they
are. The replace carries the ``resourceVersion`` that was just read; a
stale version surfaces as a ReconciliationError and is not retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flux_bootstrap.integrations.kubernetes.exceptions import (
    KubernetesAlreadyExistsError,
    ReconciliationError,
    UnsupportedResourceError,
)
from flux_bootstrap.integrations.kubernetes.models.base import CustomResource, SpecSource
from flux_bootstrap.services.kubernetes.base import K8sBaseManager

if TYPE_CHECKING:
    from flux_bootstrap.core.context import ExecutionContext


class ResourceUpsertEngine(K8sBaseManager):
    """Idempotent create-or-update through ``CustomObjectsApi``."""

    _entity_name = "upsert"

    def upsert(
        self,
        ctx: ExecutionContext,
        desired: CustomResource,
        existing_template: type[CustomResource],
        kind_label: str,
    ) -> None:
        """Create ``desired`` or bring the existing object's spec in line with it.

        Args:
            ctx: Execution context; checked before every API call.
            desired: The resource as it should be.
            existing_template: Model class the fetched object is parsed into.
                Must be the concrete class of ``desired``.
            kind_label: Kind name used in logs and errors.

        Raises:
            UnsupportedResourceError: If ``desired`` cannot copy its spec.
            ReconciliationError: If create (for a reason other than
                "already exists"), get or update fails.
        """
        if not isinstance(desired, SpecSource):
            raise UnsupportedResourceError(type(desired).__name__)

        name = desired.name
        ns = desired.namespace
        api = self._client.custom_objects

        ctx.raise_if_done()
        self._log.debug("creating_resource", kind=kind_label, name=name, namespace=ns)
        try:
            api.create_namespaced_custom_object(
                desired.GROUP,
                desired.VERSION,
                ns,
                desired.PLURAL,
                desired.to_k8s_object(),
            )
            self._log.info("created_resource", kind=kind_label, name=name, namespace=ns)
            return
        except Exception as e:
            error = self._translate(e, kind_label, name, ns)
            if not isinstance(error, KubernetesAlreadyExistsError):
                raise ReconciliationError("create", error, kind_label, name, ns) from e

        ctx.raise_if_done()
        self._log.debug("resource_exists_updating", kind=kind_label, name=name, namespace=ns)
        try:
            fetched = api.get_namespaced_custom_object(
                desired.GROUP,
                desired.VERSION,
                ns,
                desired.PLURAL,
                name,
            )
        except Exception as e:
            error = self._translate(e, kind_label, name, ns)
            raise ReconciliationError("get", error, kind_label, name, ns) from e

        existing = existing_template.from_k8s_object(fetched)
        desired.copy_spec_into(existing)

        ctx.raise_if_done()
        try:
            api.replace_namespaced_custom_object(
                desired.GROUP,
                desired.VERSION,
                ns,
                desired.PLURAL,
                name,
                existing.to_k8s_object(),
            )
        except Exception as e:
            error = self._translate(e, kind_label, name, ns)
            raise ReconciliationError("update", error, kind_label, name, ns) from e

        self._log.info(
            "updated_resource",
            kind=kind_label,
            name=name,
            namespace=ns,
            resource_version=existing.metadata.resource_version,
        )
