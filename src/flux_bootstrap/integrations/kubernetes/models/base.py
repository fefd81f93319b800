"""Base models for namespaced custom resources.

Custom resources are read and written through ``CustomObjectsApi``, which
speaks plain ``dict`` objects. The models below parse only the fields the
bootstrap reasons about and carry every other key through untouched, so an
object fetched from the cluster can be written back with just its spec
changed.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class ObjectMeta(BaseModel):
    """Object metadata; keys other than the modelled ones are preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(description="Resource name")
    namespace: str | None = Field(default=None, description="Resource namespace")
    resource_version: str | None = Field(
        default=None,
        alias="resourceVersion",
        description="Optimistic concurrency token",
    )


class CustomResource(BaseModel):
    """Base class for namespaced custom resources.

    Subclasses set the CRD coordinates as class variables and declare a
    ``spec`` field.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    GROUP: ClassVar[str] = ""
    VERSION: ClassVar[str] = ""
    PLURAL: ClassVar[str] = ""
    KIND: ClassVar[str] = ""

    metadata: ObjectMeta

    @classmethod
    def group_version(cls) -> str:
        """Return the ``group/version`` string of this kind."""
        return f"{cls.GROUP}/{cls.VERSION}"

    @property
    def name(self) -> str:
        """Resource name."""
        return self.metadata.name

    @property
    def namespace(self) -> str:
        """Resource namespace."""
        return self.metadata.namespace or "default"

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> Self:
        """Create from a ``CustomObjectsApi`` dict."""
        return cls.model_validate(obj)

    def to_k8s_object(self) -> dict[str, Any]:
        """Render the request body for ``CustomObjectsApi``."""
        body = self.model_dump(by_alias=True, exclude_none=True)
        body["apiVersion"] = self.group_version()
        body["kind"] = self.KIND
        return body


@runtime_checkable
class SpecSource(Protocol):
    """A resource that can overwrite another resource's spec with its own.

    This is the only capability the upsert engine relies on; every kind the
    bootstrap manages implements it.
    """

    def copy_spec_into(self, other: CustomResource) -> None:
        """Replace ``other``'s spec with a deep copy of this one's."""
        ...
