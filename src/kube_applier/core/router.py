"""Route parsed documents to the reconciler for their kind."""

from __future__ import annotations

import json
import logging
from typing import Any

from kube_applier.core.error_policy import on_apply_error
from kube_applier.core.k8s_client import K8sClient
from kube_applier.core.reconciler import CreateOnlyReconciler, Reconciler, build_reconcilers
from kube_applier.core.session import ApplySession
from kube_applier.errors import KubeApplierError, UnknownEntityError
from kube_applier.models import ApplyAction, ErrorAction, ResourceKind
from kube_applier.models.outcome import ReconcileResult
from kube_applier.models.resource import Resource, ResourceBundle
from kube_applier.utils.manifest_parser import parse_document

logger = logging.getLogger(__name__)

LIST_KINDS = {"Config", "List"}
TEMPLATE_KIND = "Template"


def _doc_result(
    doc: Any, action: ApplyAction, source: str, namespace: str, message: str = "",
) -> ReconcileResult:
    kind, name = "", ""
    if isinstance(doc, dict):
        kind = str(doc.get("kind") or "")
        metadata = doc.get("metadata")
        if isinstance(metadata, dict):
            name = str(metadata.get("name") or "")
    return ReconcileResult(
        kind=kind, name=name, namespace=namespace, action=action, source=source, message=message,
    )


class Router:
    """Dispatch documents, lists and typed resources within one session."""

    def __init__(
        self,
        k8s: K8sClient,
        reconcilers: dict[ResourceKind, Reconciler | CreateOnlyReconciler] | None = None,
    ):
        self.k8s = k8s
        self.reconcilers = reconcilers if reconcilers is not None else build_reconcilers(k8s)
        missing = [kind.value for kind in ResourceKind if kind not in self.reconcilers]
        if missing:
            raise ValueError(f"No reconciler for kinds: {', '.join(missing)}")

    def apply(self, document: Any, source: str, session: ApplySession) -> None:
        """Apply a typed resource, a bundle of them, or a generic document."""
        if isinstance(document, Resource):
            self.apply_entity(document, source, session)
        elif isinstance(document, ResourceBundle):
            self.apply_bundle(document, source, session)
        elif isinstance(document, dict):
            self.apply_document(document, source, session)
        else:
            raise UnknownEntityError(document)

    def apply_entity(self, resource: Resource, source: str, session: ApplySession) -> None:
        reconciler = self.reconcilers.get(resource.kind) if isinstance(resource, Resource) else None
        if reconciler is None:
            raise UnknownEntityError(resource)
        session.report.add(reconciler.reconcile(resource, source, session.policy, session.cache))

    def apply_bundle(self, bundle: ResourceBundle, source: str, session: ApplySession) -> None:
        for resource in bundle:
            if session.aborted:
                return
            self.apply_entity(resource, source, session)

    def apply_document(self, doc: dict[str, Any], source: str, session: ApplySession) -> None:
        kind = doc.get("kind")
        if kind in LIST_KINDS:
            self.apply_list(doc, source, session)
        elif kind == TEMPLATE_KIND:
            self.apply_template(doc, source, session)
        elif ResourceKind.from_kind(kind) is not None:
            self.apply_entity(Resource.from_dict(doc), source, session)
        elif kind:
            logger.warning("Unknown JSON type %s. JSON: %s", kind, doc)
            session.report.add(_doc_result(
                doc, ApplyAction.IGNORED, source, session.policy.namespace, f"unknown kind {kind}",
            ))
        else:
            logger.warning("No JSON kind for: %s", doc)
            session.report.add(_doc_result(
                doc, ApplyAction.IGNORED, source, session.policy.namespace, "no kind",
            ))

    def apply_list(self, doc: dict[str, Any], source: str, session: ApplySession) -> None:
        """Apply each item of a List or Config document on its own."""
        items = doc.get("items") or []
        for item in items:
            if session.aborted:
                return
            logger.debug("Got item: %s", item)
            try:
                dto = parse_document(item)
                self.apply(dto, source, session)
            except KubeApplierError as e:
                self._item_failed(item, source, session, e)

    def _item_failed(
        self, item: Any, source: str, session: ApplySession, cause: KubeApplierError,
    ) -> None:
        message = f"Failed to process {json.dumps(item, default=str)}. {cause}"
        action = on_apply_error(message, cause, session.policy)
        result = _doc_result(item, ApplyAction.FAILED, source, session.policy.namespace, message)
        result.error = cause
        result.aborted = action == ErrorAction.ABORT
        session.report.add(result)

    def apply_template(self, doc: dict[str, Any], source: str, session: ApplySession) -> None:
        namespace = session.policy.namespace
        try:
            self.k8s.create_template(doc, namespace or None)
        except Exception as e:
            message = f"Failed to create template from {source}. {e}"
            action = on_apply_error(message, e, session.policy)
            result = _doc_result(doc, ApplyAction.FAILED, source, namespace, message)
            result.error = e
            result.aborted = action == ErrorAction.ABORT
            session.report.add(result)
            return
        session.report.add(_doc_result(doc, ApplyAction.TEMPLATE, source, namespace))
