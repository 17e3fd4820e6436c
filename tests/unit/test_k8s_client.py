"""Tests for the Kubernetes API wrapper, with the generated APIs mocked."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from kube_applier.core.k8s_client import K8sClient


@pytest.fixture
def k8s() -> K8sClient:
    client = K8sClient()
    client._api_client = MagicMock()
    client._api_client.sanitize_for_serialization.side_effect = lambda obj: {"sanitized": True}
    client._core_v1 = MagicMock()
    client._custom = MagicMock()
    client._default_namespace = "team"
    return client


class TestListing:
    def test_pod_map_is_keyed_by_name(self, k8s: K8sClient) -> None:
        k8s.core_v1.list_namespaced_pod.return_value = SimpleNamespace(items=[
            {"metadata": {"name": "a"}},
            {"metadata": {"name": "b"}},
        ])
        pods = k8s.pod_map("apps")

        assert set(pods) == {"a", "b"}
        assert k8s.core_v1.list_namespaced_pod.call_args.kwargs["namespace"] == "apps"

    def test_blank_namespace_uses_context_default(self, k8s: K8sClient) -> None:
        k8s.core_v1.list_namespaced_service.return_value = SimpleNamespace(items=[])
        k8s.service_map(None)

        assert k8s.core_v1.list_namespaced_service.call_args.kwargs["namespace"] == "team"

    def test_model_objects_are_sanitized(self, k8s: K8sClient) -> None:
        k8s.core_v1.create_namespaced_pod.return_value = object()
        assert k8s.create_pod({"metadata": {"name": "a"}}, "apps") == {"sanitized": True}


class TestNamespaceResolution:
    def test_explicit_namespace_wins(self, k8s: K8sClient) -> None:
        k8s.create_service({"metadata": {"name": "a", "namespace": "body"}}, "explicit")
        assert k8s.core_v1.create_namespaced_service.call_args.kwargs["namespace"] == "explicit"

    def test_body_namespace_when_unscoped(self, k8s: K8sClient) -> None:
        k8s.create_service({"metadata": {"name": "a", "namespace": "body"}})
        assert k8s.core_v1.create_namespaced_service.call_args.kwargs["namespace"] == "body"

    def test_context_default_when_nothing_else(self, k8s: K8sClient) -> None:
        k8s.update_pod("a", {"metadata": {"name": "a"}})
        kwargs = k8s.core_v1.replace_namespaced_pod.call_args.kwargs
        assert (kwargs["name"], kwargs["namespace"]) == ("a", "team")


class TestDeleteReplicationController:
    def test_scales_down_deletes_pods_then_controller(self, k8s: K8sClient) -> None:
        core = k8s.core_v1
        core.read_namespaced_replication_controller.return_value = {
            "spec": {"selector": {"tier": "fe", "app": "web"}},
        }
        core.list_namespaced_pod.return_value = SimpleNamespace(items=[
            SimpleNamespace(metadata=SimpleNamespace(name="web-1")),
            SimpleNamespace(metadata=SimpleNamespace(name="web-2")),
        ])

        k8s.delete_replication_controller_and_pods("web", "prod")

        assert core.patch_namespaced_replication_controller.call_args.kwargs["body"] == {
            "spec": {"replicas": 0},
        }
        assert core.list_namespaced_pod.call_args.kwargs["label_selector"] == "app=web,tier=fe"
        deleted = [c.kwargs["name"] for c in core.delete_namespaced_pod.call_args_list]
        assert deleted == ["web-1", "web-2"]
        core.delete_namespaced_replication_controller.assert_called_once()


class TestOpenShiftKinds:
    def test_build_config_uses_custom_objects_api(self, k8s: K8sClient) -> None:
        k8s.create_build_config({"metadata": {"name": "site"}}, "builds")
        kwargs = k8s.custom.create_namespaced_custom_object.call_args.kwargs
        assert (kwargs["group"], kwargs["plural"], kwargs["namespace"]) == (
            "build.openshift.io", "buildconfigs", "builds",
        )

    def test_template_is_processed_server_side(self, k8s: K8sClient) -> None:
        k8s.create_template({"kind": "Template", "metadata": {"name": "t"}})
        kwargs = k8s.custom.create_namespaced_custom_object.call_args.kwargs
        assert (kwargs["plural"], kwargs["namespace"]) == ("processedtemplates", "team")
