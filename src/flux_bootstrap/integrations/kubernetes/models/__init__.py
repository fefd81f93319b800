"""Custom resource models for the bootstrap."""

from flux_bootstrap.integrations.kubernetes.models.base import (
    CustomResource,
    ObjectMeta,
    SpecSource,
)
from flux_bootstrap.integrations.kubernetes.models.flux import (
    Distribution,
    FluxInstance,
    FluxInstanceSpec,
    OCIRepository,
    OCIRepositorySpec,
    Sync,
)

__all__ = [
    "CustomResource",
    "Distribution",
    "FluxInstance",
    "FluxInstanceSpec",
    "OCIRepository",
    "OCIRepositorySpec",
    "ObjectMeta",
    "SpecSource",
    "Sync",
]
