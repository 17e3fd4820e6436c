"""Resource identity and configuration equality."""

from __future__ import annotations

from typing import Any

from deepdiff import DeepDiff

from kube_applier.models.resource import Resource

# Fields that are owned by the server or are not part of the configuration
IGNORED_FIELDS = {
    "apiVersion",
    "kind",
    "status",
    "metadata.namespace",
    "metadata.resourceVersion",
    "metadata.uid",
    "metadata.creationTimestamp",
    "metadata.generation",
    "metadata.managedFields",
    "metadata.selfLink",
    "metadata.annotations.kubectl.kubernetes.io/last-applied-configuration",
}


def resource_id(resource: Resource) -> str:
    """Return the key a resource is looked up and mutated by."""
    return resource.name


def strip_server_fields(obj: dict, prefix: str = "") -> dict:
    """Remove server-managed fields from a manifest dict for comparison."""
    cleaned = {}
    for key, value in obj.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if full_key in IGNORED_FIELDS:
            continue
        if isinstance(value, dict):
            inner = strip_server_fields(value, full_key)
            if inner:
                cleaned[key] = inner
        else:
            cleaned[key] = value
    return cleaned


def project_onto(declared: Any, live: Any) -> Any:
    """Keep only the parts of ``live`` that ``declared`` also sets.

    Fields the server adds or defaults (a Service clusterIP, a port protocol,
    a container imagePullPolicy) drop out. Lists are matched by position and
    only when both sides have the same length.
    """
    if isinstance(declared, dict) and isinstance(live, dict):
        return {k: project_onto(v, live[k]) for k, v in declared.items() if k in live}
    if isinstance(declared, list) and isinstance(live, list) and len(declared) == len(live):
        return [project_onto(d, item) for d, item in zip(declared, live)]
    return live


def _diff(desired: dict, live: dict) -> DeepDiff:
    declared = strip_server_fields(desired)
    return DeepDiff(
        declared,
        project_onto(declared, strip_server_fields(live)),
        verbose_level=2,
    )


def config_equal(desired: Resource | dict, live: Resource | dict | None) -> bool:
    """Return True if the live object matches every field the manifest declares.

    List order is significant. A missing live object is never equal to
    anything.
    """
    if live is None:
        return False
    return not _diff(_raw(desired), _raw(live))


def describe_changes(desired: Resource | dict, live: Resource | dict) -> list[str]:
    """Render the configuration differences as human-readable lines."""
    diff = _diff(_raw(desired), _raw(live))
    if not diff:
        return []
    return _format_diff(diff)


def _raw(obj: Resource | dict) -> dict[str, Any]:
    return obj.raw if isinstance(obj, Resource) else obj


def _format_diff(diff: DeepDiff) -> list[str]:
    details: list[str] = []

    if "values_changed" in diff:
        for path, change in diff["values_changed"].items():
            live_value = change.get("new_value", "?")
            desired_value = change.get("old_value", "?")
            details.append(f"Changed {path}: {live_value!r} -> {desired_value!r}")

    if "dictionary_item_added" in diff:
        for path in diff["dictionary_item_added"]:
            details.append(f"Only live: {path}")

    if "dictionary_item_removed" in diff:
        for path in diff["dictionary_item_removed"]:
            details.append(f"Only desired: {path}")

    if "iterable_item_added" in diff:
        for path in diff["iterable_item_added"]:
            details.append(f"List item only live: {path}")

    if "iterable_item_removed" in diff:
        for path in diff["iterable_item_removed"]:
            details.append(f"List item only desired: {path}")

    if "type_changes" in diff:
        for path in diff["type_changes"]:
            details.append(f"Type changed {path}")

    return details or ["Differences detected"]
