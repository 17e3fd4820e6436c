"""Tests for resource identity and configuration equality."""

from __future__ import annotations

from kube_applier.core.identity import (
    config_equal,
    describe_changes,
    project_onto,
    resource_id,
    strip_server_fields,
)
from kube_applier.models.resource import Resource

_DESIRED = {
    "apiVersion": "v1",
    "kind": "Service",
    "metadata": {"name": "web", "labels": {"app": "web"}},
    "spec": {"selector": {"app": "web"}, "ports": [{"port": 80}, {"port": 443}]},
}


def _live(**spec_overrides: object) -> dict:
    spec = dict(_DESIRED["spec"])
    spec.update(spec_overrides)
    return {
        "metadata": {
            "name": "web",
            "namespace": "default",
            "labels": {"app": "web"},
            "uid": "abc",
            "resourceVersion": "12",
            "generation": 3,
            "managedFields": [{"manager": "kubectl"}],
            "annotations": {
                "kubectl.kubernetes.io/last-applied-configuration": "{}",
            },
        },
        "spec": spec,
        "status": {"loadBalancer": {}},
    }


class TestResourceId:
    def test_id_is_metadata_name(self) -> None:
        assert resource_id(Resource.from_dict(_DESIRED)) == "web"


class TestConfigEqual:
    def test_server_fields_are_ignored(self) -> None:
        assert config_equal(Resource.from_dict(_DESIRED), _live())

    def test_port_order_is_a_change(self) -> None:
        live = _live(ports=[{"port": 443}, {"port": 80}])
        assert not config_equal(_DESIRED, live)

    def test_any_spec_difference_is_a_change(self) -> None:
        assert not config_equal(_DESIRED, _live(ports=[{"port": 8080}]))

    def test_server_defaulted_fields_are_equal(self) -> None:
        live = _live(
            clusterIP="10.0.0.1",
            clusterIPs=["10.0.0.1"],
            type="ClusterIP",
            sessionAffinity="None",
            ports=[
                {"port": 80, "protocol": "TCP", "targetPort": 80},
                {"port": 443, "protocol": "TCP", "targetPort": 443},
            ],
        )
        assert config_equal(_DESIRED, live)

    def test_extra_live_label_is_equal(self) -> None:
        live = _live()
        live["metadata"]["labels"] = {"app": "web", "tier": "frontend"}
        assert config_equal(_DESIRED, live)

    def test_changed_label_value_is_a_change(self) -> None:
        live = _live()
        live["metadata"]["labels"] = {"app": "api"}
        assert not config_equal(_DESIRED, live)

    def test_declared_field_missing_from_live_is_a_change(self) -> None:
        live = _live()
        del live["spec"]["selector"]
        assert not config_equal(_DESIRED, live)

    def test_extra_live_list_item_is_a_change(self) -> None:
        live = _live(ports=[{"port": 80}, {"port": 443}, {"port": 8443}])
        assert not config_equal(_DESIRED, live)

    def test_missing_live_object_is_never_equal(self) -> None:
        assert not config_equal(_DESIRED, None)


class TestProjectOnto:
    def test_undeclared_keys_are_dropped(self) -> None:
        declared = {"spec": {"ports": [{"port": 80}]}}
        live = {"spec": {"clusterIP": "10.0.0.1", "ports": [{"port": 80, "protocol": "TCP"}]}}
        assert project_onto(declared, live) == declared

    def test_lists_of_different_length_are_kept_whole(self) -> None:
        live = [{"port": 80, "protocol": "TCP"}, {"port": 443}]
        assert project_onto([{"port": 80}], live) == live


class TestStripServerFields:
    def test_empty_annotations_are_dropped(self) -> None:
        cleaned = strip_server_fields(_live())
        assert "annotations" not in cleaned["metadata"]
        assert "status" not in cleaned
        assert cleaned["metadata"] == {"name": "web", "labels": {"app": "web"}}


class TestDescribeChanges:
    def test_changed_value_is_described(self) -> None:
        live = _live(selector={"app": "old"})
        lines = describe_changes(_DESIRED, live)
        assert any("'old' -> 'web'" in line for line in lines)

    def test_no_changes_gives_no_lines(self) -> None:
        assert describe_changes(_DESIRED, _live()) == []
