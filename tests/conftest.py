"""Shared fixtures: a recording stand-in for the cluster client."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

import pytest

from kube_applier.core.applier import Applier
from kube_applier.models.policy import ApplyPolicy


class FakeK8sClient:
    """Records every call; live state is namespace -> name -> object per kind.

    A blank namespace argument means ``default_namespace``, as for the real
    client.

    Set ``fail[op] = exc`` to make operation ``op`` raise ``exc``.
    """

    def __init__(self) -> None:
        self.default_namespace = "default"
        self.pods: defaultdict[str, dict[str, dict]] = defaultdict(dict)
        self.replication_controllers: defaultdict[str, dict[str, dict]] = defaultdict(dict)
        self.services: defaultdict[str, dict[str, dict]] = defaultdict(dict)
        self.calls: list[tuple[Any, ...]] = []
        self.fail: dict[str, Exception] = {}

    def _record(self, op: str, *args: Any) -> None:
        self.calls.append((op, *args))
        if op in self.fail:
            raise self.fail[op]

    @property
    def mutations(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if not c[0].startswith("list_")]

    def ops(self, prefix: str = "") -> list[str]:
        return [c[0] for c in self.calls if c[0].startswith(prefix)]

    def pod_map(self, namespace: str | None = None) -> dict[str, dict]:
        self._record("list_pods", namespace)
        return dict(self.pods[namespace or self.default_namespace])

    def replication_controller_map(self, namespace: str | None = None) -> dict[str, dict]:
        self._record("list_replication_controllers", namespace)
        return dict(self.replication_controllers[namespace or self.default_namespace])

    def service_map(self, namespace: str | None = None) -> dict[str, dict]:
        self._record("list_services", namespace)
        return dict(self.services[namespace or self.default_namespace])

    def create_pod(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_pod", body, namespace)
        return body

    def update_pod(self, name: str, body: dict, namespace: str | None = None) -> dict:
        self._record("update_pod", name, body, namespace)
        return body

    def delete_pod(self, name: str, namespace: str | None = None) -> dict:
        self._record("delete_pod", name, namespace)
        return {}

    def create_replication_controller(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_replication_controller", body, namespace)
        return body

    def update_replication_controller(
        self, name: str, body: dict, namespace: str | None = None,
    ) -> dict:
        self._record("update_replication_controller", name, body, namespace)
        return body

    def delete_replication_controller_and_pods(
        self, name: str, namespace: str | None = None,
    ) -> dict:
        self._record("delete_replication_controller_and_pods", name, namespace)
        return {}

    def create_service(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_service", body, namespace)
        return body

    def update_service(self, name: str, body: dict, namespace: str | None = None) -> dict:
        self._record("update_service", name, body, namespace)
        return body

    def delete_service(self, name: str, namespace: str | None = None) -> dict:
        self._record("delete_service", name, namespace)
        return {}

    def create_build_config(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_build_config", body, namespace)
        return body

    def create_deployment_config(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_deployment_config", body, namespace)
        return body

    def create_image_stream(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_image_stream", body, namespace)
        return body

    def create_template(self, body: dict, namespace: str | None = None) -> dict:
        self._record("create_template", body, namespace)
        return body


@pytest.fixture
def fake_k8s() -> FakeK8sClient:
    return FakeK8sClient()


@pytest.fixture
def applier(fake_k8s: FakeK8sClient) -> Applier:
    """An applier with default policy and no namespace."""
    return Applier(fake_k8s, ApplyPolicy())  # type: ignore[arg-type]
