"""State that lives for exactly one apply call."""

from __future__ import annotations

from dataclasses import dataclass

from kube_applier.core.k8s_client import K8sClient
from kube_applier.core.state_cache import ClusterStateCache
from kube_applier.models.outcome import ApplyReport
from kube_applier.models.policy import ApplyPolicy


@dataclass
class ApplySession:
    policy: ApplyPolicy
    cache: ClusterStateCache
    report: ApplyReport

    @classmethod
    def open(cls, k8s: K8sClient, policy: ApplyPolicy, source: str) -> ApplySession:
        return cls(policy=policy, cache=ClusterStateCache(k8s), report=ApplyReport(source=source))

    @property
    def aborted(self) -> bool:
        return self.report.aborted
