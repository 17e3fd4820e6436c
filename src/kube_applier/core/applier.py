"""Apply manifests to the current Kubernetes cluster."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import IO, Any

from kube_applier.config.settings import settings
from kube_applier.core.k8s_client import K8sClient
from kube_applier.core.router import Router
from kube_applier.core.session import ApplySession
from kube_applier.errors import ApplyError
from kube_applier.models.outcome import ApplyReport
from kube_applier.models.policy import ApplyPolicy
from kube_applier.utils.manifest_parser import JsonSource, load_file, load_json, load_yaml

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "REST call"


class Applier:
    """Applies resources, lists and templates to the cluster.

    Every ``apply*`` call runs in a fresh session: live state is listed at
    most once per kind and namespace, and the snapshot is dropped when the
    call returns. Mutation failures are logged and reported in the returned
    :class:`ApplyReport`; with ``throw_on_error`` set the first failure stops
    the call and :class:`ApplyError` is raised.
    """

    def __init__(self, k8s: K8sClient | None = None, policy: ApplyPolicy | None = None):
        self.k8s = k8s if k8s is not None else K8sClient()
        self.policy = policy if policy is not None else settings.default_policy()
        self.router = Router(self.k8s)

    @property
    def namespace(self) -> str:
        return self.policy.namespace

    @namespace.setter
    def namespace(self, value: str | None) -> None:
        self.policy = dataclasses.replace(self.policy, namespace=value or "")

    @property
    def allow_create(self) -> bool:
        return self.policy.allow_create

    @allow_create.setter
    def allow_create(self, value: bool) -> None:
        self.policy = dataclasses.replace(self.policy, allow_create=value)

    @property
    def update_via_delete_and_create(self) -> bool:
        return self.policy.update_via_delete_and_create

    @update_via_delete_and_create.setter
    def update_via_delete_and_create(self, value: bool) -> None:
        self.policy = dataclasses.replace(self.policy, update_via_delete_and_create=value)

    @property
    def throw_on_error(self) -> bool:
        return self.policy.throw_on_error

    @throw_on_error.setter
    def throw_on_error(self, value: bool) -> None:
        self.policy = dataclasses.replace(self.policy, throw_on_error=value)

    def apply(self, document: Any, source: str = DEFAULT_SOURCE) -> ApplyReport:
        """Apply an already parsed document."""
        session = ApplySession.open(self.k8s, self.policy, source)
        self.router.apply(document, source, session)
        report = session.report
        logger.debug("Applied %s: %s", source, report.summary)
        if report.aborted and session.policy.throw_on_error:
            raise ApplyError(report.abort_message, report) from report.abort_cause
        return report

    def apply_json(self, source: JsonSource, source_name: str = DEFAULT_SOURCE) -> ApplyReport:
        return self.apply(load_json(source), source_name)

    def apply_yaml(self, source: str | bytes | Path | IO[str], source_name: str = DEFAULT_SOURCE) -> ApplyReport:
        return self.apply(load_yaml(source), source_name)

    def apply_file(self, path: str | Path) -> ApplyReport:
        """Apply a ``.json``, ``.yaml`` or ``.yml`` file."""
        path = Path(path)
        return self.apply(load_file(path), str(path))
