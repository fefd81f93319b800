"""Unit tests for Flux resource models."""

from __future__ import annotations

from typing import Any

import pytest

from flux_bootstrap.integrations.kubernetes.exceptions import UnsupportedResourceError
from flux_bootstrap.integrations.kubernetes.models.base import ObjectMeta, SpecSource
from flux_bootstrap.integrations.kubernetes.models.flux import (
    Distribution,
    FluxInstance,
    FluxInstanceSpec,
    OCIRepository,
    Sync,
)


def _server_flux_instance() -> dict[str, Any]:
    return {
        "apiVersion": "fluxcd.controlplane.io/v1",
        "kind": "FluxInstance",
        "metadata": {
            "name": "flux",
            "namespace": "flux-system",
            "resourceVersion": "42",
            "uid": "abc-123",
            "labels": {"app": "flux"},
        },
        "spec": {
            "distribution": {"version": "2.x", "registry": "ghcr.io/fluxcd"},
            "sync": {
                "kind": "OCIRepository",
                "url": "oci://localhost:5111/k8s",
                "ref": "latest",
                "path": "./",
                "interval": "1m0s",
            },
            "cluster": {"type": "kubernetes"},
        },
        "status": {
            "conditions": [
                {"type": "Ready", "status": "True", "reason": "ReconciliationSucceeded"}
            ],
            "lastAppliedRevision": "v2.4.0",
        },
    }


def _desired(url: str = "oci://local-registry:5000/k8s") -> FluxInstance:
    return FluxInstance(
        metadata=ObjectMeta(name="flux", namespace="flux-system"),
        spec=FluxInstanceSpec(
            distribution=Distribution(version="2.x", registry="ghcr.io/fluxcd"),
            sync=Sync(kind="OCIRepository", url=url, ref="latest", path="./", interval="3m0s"),
        ),
    )


@pytest.mark.unit
@pytest.mark.kubernetes
class TestFluxInstance:
    """Tests for the FluxInstance model."""

    def test_coordinates(self) -> None:
        assert FluxInstance.group_version() == "fluxcd.controlplane.io/v1"
        assert FluxInstance.PLURAL == "fluxinstances"

    def test_round_trip_preserves_unknown_fields(self) -> None:
        """Fields the model does not declare survive parse and render."""
        obj = _server_flux_instance()

        assert FluxInstance.from_k8s_object(obj).to_k8s_object() == obj

    def test_status_passes_through_unchanged(self) -> None:
        """Operator-written conditions are not rewritten with defaults."""
        obj = _server_flux_instance()
        obj["status"]["conditions"] = [{"type": "Ready"}]

        body = FluxInstance.from_k8s_object(obj).to_k8s_object()

        assert body["status"] == {
            "conditions": [{"type": "Ready"}],
            "lastAppliedRevision": "v2.4.0",
        }

    def test_to_k8s_object_omits_unset(self) -> None:
        body = _desired().to_k8s_object()

        assert body["apiVersion"] == "fluxcd.controlplane.io/v1"
        assert body["kind"] == "FluxInstance"
        assert "status" not in body
        assert "resourceVersion" not in body["metadata"]
        assert "pullSecret" not in body["spec"]["sync"]

    def test_copy_spec_into_keeps_metadata_and_status(self) -> None:
        """Only the spec of the target changes."""
        existing = FluxInstance.from_k8s_object(_server_flux_instance())

        _desired().copy_spec_into(existing)
        body = existing.to_k8s_object()

        assert body["spec"]["sync"]["url"] == "oci://local-registry:5000/k8s"
        assert body["spec"]["sync"]["interval"] == "3m0s"
        assert "cluster" not in body["spec"]
        assert body["metadata"]["resourceVersion"] == "42"
        assert body["metadata"]["uid"] == "abc-123"
        assert body["status"]["lastAppliedRevision"] == "v2.4.0"

    def test_copy_spec_is_deep(self) -> None:
        desired = _desired()
        existing = FluxInstance.from_k8s_object(_server_flux_instance())

        desired.copy_spec_into(existing)
        desired.spec.sync.url = "oci://elsewhere:1/x"

        assert existing.spec.sync.url == "oci://local-registry:5000/k8s"

    def test_copy_spec_into_other_kind(self) -> None:
        other = OCIRepository(metadata=ObjectMeta(name="flux-system", namespace="flux-system"))

        with pytest.raises(UnsupportedResourceError, match="OCIRepository"):
            _desired().copy_spec_into(other)

    def test_is_spec_source(self) -> None:
        assert isinstance(_desired(), SpecSource)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestOCIRepository:
    """Tests for the OCIRepository model."""

    def test_parse(self) -> None:
        repo = OCIRepository.from_k8s_object(
            {
                "apiVersion": "source.toolkit.fluxcd.io/v1",
                "kind": "OCIRepository",
                "metadata": {"name": "flux-system", "namespace": "flux-system"},
                "spec": {"url": "oci://local-registry:5000/k8s", "ref": {"tag": "latest"}},
            }
        )

        assert repo.spec.insecure is False
        assert repo.url == "oci://local-registry:5000/k8s"
        assert OCIRepository.group_version() == "source.toolkit.fluxcd.io/v1"

    def test_insecure_written_back_with_spec(self) -> None:
        repo = OCIRepository.from_k8s_object(
            {
                "metadata": {"name": "flux-system", "namespace": "flux-system"},
                "spec": {"url": "oci://local-registry:5000/k8s", "interval": "1m0s"},
            }
        )
        repo.spec.insecure = True

        spec = repo.to_k8s_object()["spec"]

        assert spec == {"url": "oci://local-registry:5000/k8s", "interval": "1m0s", "insecure": True}

    def test_copy_spec_into_other_kind(self) -> None:
        repo = OCIRepository(metadata=ObjectMeta(name="flux-system", namespace="flux-system"))

        with pytest.raises(UnsupportedResourceError):
            repo.copy_spec_into(_desired())
