"""Shared fixtures for Kubernetes service tests."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException

from flux_bootstrap.integrations.kubernetes.client import KubernetesClient
from flux_bootstrap.integrations.kubernetes.config import BootstrapDefaultsConfig
from flux_bootstrap.integrations.kubernetes.exceptions import KubernetesNotFoundError

Key = tuple[str, str, str, str, str]


def _status_exception(status: int, reason: str, status_reason: str) -> ApiException:
    exc = ApiException(status=status, reason=reason)
    exc.body = json.dumps({"kind": "Status", "code": status, "reason": status_reason})
    return exc


class FakeCustomObjectsApi:
    """In-memory stand-in for ``CustomObjectsApi`` with API server semantics.

    Enforces name uniqueness on create and ``resourceVersion`` matching on
    replace, and records every call in ``calls``.
    """

    def __init__(self) -> None:
        self.objects: dict[Key, dict[str, Any]] = {}
        self.calls: list[tuple[str, str, str]] = []
        self.on_create: list[Callable[[dict[str, Any]], None]] = []
        self._version = 0

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    @property
    def writes(self) -> list[tuple[str, str, str]]:
        return [c for c in self.calls if c[0] in ("create", "replace")]

    def seed(self, group: str, version: str, namespace: str, plural: str, body: dict) -> None:
        obj = copy.deepcopy(body)
        obj["metadata"]["resourceVersion"] = self._next_version()
        self.objects[(group, version, namespace, plural, obj["metadata"]["name"])] = obj

    def stored(self, group: str, version: str, namespace: str, plural: str, name: str) -> dict:
        return self.objects[(group, version, namespace, plural, name)]

    def create_namespaced_custom_object(
        self, group: str, version: str, namespace: str, plural: str, body: dict
    ) -> dict:
        name = body["metadata"]["name"]
        self.calls.append(("create", plural, name))
        key = (group, version, namespace, plural, name)
        if key in self.objects:
            raise _status_exception(409, "Conflict", "AlreadyExists")
        obj = copy.deepcopy(body)
        obj["metadata"]["resourceVersion"] = self._next_version()
        obj["metadata"]["uid"] = f"uid-{name}"
        self.objects[key] = obj
        for hook in self.on_create:
            hook(copy.deepcopy(obj))
        return copy.deepcopy(obj)

    def get_namespaced_custom_object(
        self, group: str, version: str, namespace: str, plural: str, name: str
    ) -> dict:
        self.calls.append(("get", plural, name))
        key = (group, version, namespace, plural, name)
        if key not in self.objects:
            raise _status_exception(404, "Not Found", "NotFound")
        return copy.deepcopy(self.objects[key])

    def replace_namespaced_custom_object(
        self, group: str, version: str, namespace: str, plural: str, name: str, body: dict
    ) -> dict:
        self.calls.append(("replace", plural, name))
        key = (group, version, namespace, plural, name)
        if key not in self.objects:
            raise _status_exception(404, "Not Found", "NotFound")
        current = self.objects[key]
        sent = body["metadata"].get("resourceVersion")
        if sent is not None and sent != current["metadata"]["resourceVersion"]:
            raise _status_exception(409, "Conflict", "Conflict")
        obj = copy.deepcopy(body)
        obj["metadata"]["resourceVersion"] = self._next_version()
        self.objects[key] = obj
        return copy.deepcopy(obj)


class FakeClusterClient:
    """KubernetesClient double backed by FakeCustomObjectsApi."""

    translate_api_exception = staticmethod(KubernetesClient.translate_api_exception)

    def __init__(self) -> None:
        self.custom_objects = FakeCustomObjectsApi()
        self.served: set[str] = set()
        self.discovery_calls: list[str] = []
        self.close = MagicMock()

    def server_resources_for_group_version(self, group_version: str) -> dict:
        self.discovery_calls.append(group_version)
        if group_version not in self.served:
            raise KubernetesNotFoundError(
                resource_type="APIGroupVersion",
                resource_name=group_version,
            )
        return {"groupVersion": group_version, "resources": []}


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mock Kubernetes client that translates errors like the real one."""
    mock_client = MagicMock()
    mock_client.translate_api_exception.side_effect = KubernetesClient.translate_api_exception
    return mock_client


@pytest.fixture
def fake_cluster() -> FakeClusterClient:
    """Create an in-memory cluster client with nothing served yet."""
    return FakeClusterClient()


@pytest.fixture
def fast_defaults() -> BootstrapDefaultsConfig:
    """Wait timing short enough for unit tests."""
    return BootstrapDefaultsConfig(api_timeout=0.1, poll_interval=0.005)


@pytest.fixture
def not_found() -> Callable[[], ApiException]:
    """Factory for a 404 ApiException."""
    return lambda: _status_exception(404, "Not Found", "NotFound")
