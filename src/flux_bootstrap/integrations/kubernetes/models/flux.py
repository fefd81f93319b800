"""Flux operator and source-controller resource models.

``FluxInstance`` is the declarative resource the bootstrap owns. The
operator reacts to it by installing the Flux controllers and creating an
``OCIRepository`` that tracks the sync artifact; the bootstrap only ever
patches that second object.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from flux_bootstrap.integrations.kubernetes.exceptions import UnsupportedResourceError
from flux_bootstrap.integrations.kubernetes.models.base import CustomResource


# =============================================================================
# FluxInstance
# =============================================================================


class Distribution(BaseModel):
    """Which Flux build the operator should install."""

    model_config = ConfigDict(extra="allow")

    version: str
    registry: str
    artifact: str | None = None


class Sync(BaseModel):
    """OCI source the operator tracks and applies."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kind: str
    url: str
    ref: str
    path: str
    name: str | None = None
    interval: str | None = None
    pull_secret: str | None = Field(default=None, alias="pullSecret")
    provider: str | None = None


class FluxInstanceSpec(BaseModel):
    """FluxInstance ``.spec``."""

    model_config = ConfigDict(extra="allow")

    distribution: Distribution
    sync: Sync | None = None


class FluxInstance(CustomResource):
    """Flux operator ``FluxInstance`` resource.

    ``status`` is owned by the operator and carried through unparsed.
    """

    GROUP: ClassVar[str] = "fluxcd.controlplane.io"
    VERSION: ClassVar[str] = "v1"
    PLURAL: ClassVar[str] = "fluxinstances"
    KIND: ClassVar[str] = "FluxInstance"

    spec: FluxInstanceSpec | None = None

    def copy_spec_into(self, other: CustomResource) -> None:
        """Replace ``other``'s spec with a deep copy of this one's."""
        if not isinstance(other, FluxInstance):
            raise UnsupportedResourceError(type(other).__name__)
        other.spec = self.spec.model_copy(deep=True) if self.spec is not None else None


# =============================================================================
# OCIRepository
# =============================================================================


class OCIRepositorySpec(BaseModel):
    """OCIRepository ``.spec``; only ``insecure`` is interpreted here."""

    model_config = ConfigDict(extra="allow")

    insecure: bool = False


class OCIRepository(CustomResource):
    """Flux source-controller ``OCIRepository`` resource."""

    GROUP: ClassVar[str] = "source.toolkit.fluxcd.io"
    VERSION: ClassVar[str] = "v1"
    PLURAL: ClassVar[str] = "ocirepositories"
    KIND: ClassVar[str] = "OCIRepository"

    spec: OCIRepositorySpec = Field(default_factory=OCIRepositorySpec)

    @property
    def url(self) -> str | None:
        """Artifact URL, when the operator has set one."""
        extra: dict[str, Any] = self.spec.model_extra or {}
        return extra.get("url")

    def copy_spec_into(self, other: CustomResource) -> None:
        """Replace ``other``'s spec with a deep copy of this one's."""
        if not isinstance(other, OCIRepository):
            raise UnsupportedResourceError(type(other).__name__)
        other.spec = self.spec.model_copy(deep=True)
