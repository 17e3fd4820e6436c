"""Per-session snapshot of live cluster state."""

from __future__ import annotations

import logging
from typing import Callable

from kube_applier.core.k8s_client import K8sClient
from kube_applier.models import ResourceKind

logger = logging.getLogger(__name__)


def _fetchers(k8s: K8sClient) -> dict[ResourceKind, Callable[[str | None], dict[str, dict]]]:
    return {
        ResourceKind.POD: k8s.pod_map,
        ResourceKind.REPLICATION_CONTROLLER: k8s.replication_controller_map,
        ResourceKind.SERVICE: k8s.service_map,
    }


class ClusterStateCache:
    """Lazily lists each (kind, namespace) once and keeps the result.

    The snapshot is never refreshed, not even after this session's own
    writes. Create a new cache for every apply session.
    """

    def __init__(self, k8s: K8sClient):
        self.k8s = k8s
        self._maps: dict[tuple[ResourceKind, str], dict[str, dict]] = {}
        self.reads = 0

    def map_for(self, kind: ResourceKind, namespace: str) -> dict[str, dict]:
        key = (kind, namespace)
        if key not in self._maps:
            fetch = _fetchers(self.k8s).get(kind)
            if fetch is None:
                raise ValueError(f"No live state listing for {kind.value}")
            logger.debug("Listing %s in namespace %r", kind.value, namespace or "<default>")
            self._maps[key] = fetch(namespace or None)
            self.reads += 1
        return self._maps[key]

    def lookup(self, kind: ResourceKind, namespace: str, name: str) -> dict | None:
        return self.map_for(kind, namespace).get(name)
