"""Per-kind reconciliation of a desired resource against live state."""

from __future__ import annotations

import logging
from typing import Any, Callable

from kube_applier.core.error_policy import on_apply_error
from kube_applier.core.identity import config_equal, describe_changes, resource_id
from kube_applier.core.k8s_client import K8sClient
from kube_applier.core.state_cache import ClusterStateCache
from kube_applier.models import ApplyAction, ErrorAction, ResourceKind
from kube_applier.models.outcome import ReconcileResult
from kube_applier.models.policy import ApplyPolicy
from kube_applier.models.resource import Resource

logger = logging.getLogger(__name__)

CreateFn = Callable[..., Any]
UpdateFn = Callable[..., Any]
DeleteFn = Callable[..., Any]


def effective_namespace(resource: Resource, policy: ApplyPolicy) -> str:
    """Namespace used for the lookup and every mutation of one resource.

    Blank means the cluster client default namespace.
    """
    return policy.namespace or resource.namespace


def _result(
    resource: Resource,
    namespace: str,
    action: ApplyAction,
    source: str,
    message: str = "",
) -> ReconcileResult:
    return ReconcileResult(
        kind=resource.kind.value,
        name=resource.name,
        namespace=namespace,
        action=action,
        source=source,
        message=message,
    )


def _failure(
    resource: Resource,
    namespace: str,
    source: str,
    message: str,
    cause: BaseException,
    policy: ApplyPolicy,
) -> ReconcileResult:
    action = on_apply_error(message, cause, policy)
    result = _result(resource, namespace, ApplyAction.FAILED, source, message)
    result.error = cause
    result.aborted = action == ErrorAction.ABORT
    return result


class Reconciler:
    """Create, update, recreate or leave alone one kind of resource."""

    def __init__(
        self,
        kind: ResourceKind,
        label: str,
        create: CreateFn,
        update: UpdateFn,
        delete: DeleteFn,
    ):
        self.kind = kind
        self.label = label
        self._create_fn = create
        self._update_fn = update
        self._delete_fn = delete

    def reconcile(
        self,
        resource: Resource,
        source: str,
        policy: ApplyPolicy,
        cache: ClusterStateCache,
    ) -> ReconcileResult:
        namespace = effective_namespace(resource, policy)
        name = resource_id(resource)
        live = cache.lookup(self.kind, namespace, name)

        if live is None:
            if not policy.allow_create:
                logger.warning(
                    "Creation disabled so not creating a %s from %s namespace %s name %s",
                    self.label, source, namespace, name,
                )
                return _result(resource, namespace, ApplyAction.SKIPPED, source, "creation disabled")
            return self._create(resource, namespace, source, policy)

        if config_equal(resource, live):
            logger.info("%s %s hasn't changed so not doing anything", self.label, name)
            return _result(resource, namespace, ApplyAction.UNCHANGED, source)

        for line in describe_changes(resource, live):
            logger.debug("%s %s: %s", self.label, name, line)

        if policy.update_via_delete_and_create:
            return self._recreate(resource, namespace, source, policy)

        logger.info("Updating a %s from %s namespace %s name %s", self.label, source, namespace, name)
        try:
            answer = self._update_fn(name, resource.raw, namespace or None)
        except Exception as e:
            return _failure(
                resource, namespace, source,
                f"Failed to update {self.label} from {source}. {e}. {resource.label}", e, policy,
            )
        logger.info("Updated %s: %s", self.label, _answer_name(answer))
        return _result(resource, namespace, ApplyAction.UPDATED, source)

    def _recreate(
        self, resource: Resource, namespace: str, source: str, policy: ApplyPolicy,
    ) -> ReconcileResult:
        logger.info("Deleting %s %s so it can be recreated", self.label, resource.name)
        try:
            self._delete_fn(resource.name, namespace or None)
        except Exception as e:
            return _failure(
                resource, namespace, source,
                f"Failed to delete {self.label} from {source}. {e}. {resource.label}", e, policy,
            )
        result = self._create(resource, namespace, source, policy)
        if result.action == ApplyAction.CREATED:
            result.action = ApplyAction.RECREATED
        return result

    def _create(
        self, resource: Resource, namespace: str, source: str, policy: ApplyPolicy,
    ) -> ReconcileResult:
        logger.info(
            "Creating a %s from %s namespace %s name %s", self.label, source, namespace, resource.name,
        )
        try:
            if namespace:
                answer = self._create_fn(resource.raw, namespace)
            else:
                answer = self._create_fn(resource.raw)
        except Exception as e:
            return _failure(
                resource, namespace, source,
                f"Failed to create {self.label} from {source}. {e}. {resource.label}", e, policy,
            )
        logger.info("Created %s: %s", self.label, _answer_name(answer))
        return _result(resource, namespace, ApplyAction.CREATED, source)


class CreateOnlyReconciler:
    """Always create; no lookup and no update path."""

    def __init__(self, kind: ResourceKind, label: str, create: CreateFn):
        self.kind = kind
        self.label = label
        self._create_fn = create

    def reconcile(
        self,
        resource: Resource,
        source: str,
        policy: ApplyPolicy,
        cache: ClusterStateCache,
    ) -> ReconcileResult:
        namespace = effective_namespace(resource, policy)
        logger.info("Creating a %s from %s name %s", self.label, source, resource.name)
        try:
            self._create_fn(resource.raw, namespace or None)
        except Exception as e:
            return _failure(
                resource, namespace, source,
                f"Failed to create {self.label} from {source}. {e}", e, policy,
            )
        return _result(resource, namespace, ApplyAction.CREATED, source)


def build_reconcilers(k8s: K8sClient) -> dict[ResourceKind, Reconciler | CreateOnlyReconciler]:
    """One reconciler per supported kind."""
    return {
        ResourceKind.POD: Reconciler(
            ResourceKind.POD, "pod",
            create=k8s.create_pod,
            update=k8s.update_pod,
            delete=k8s.delete_pod,
        ),
        ResourceKind.REPLICATION_CONTROLLER: Reconciler(
            ResourceKind.REPLICATION_CONTROLLER, "replicationController",
            create=k8s.create_replication_controller,
            update=k8s.update_replication_controller,
            delete=k8s.delete_replication_controller_and_pods,
        ),
        ResourceKind.SERVICE: Reconciler(
            ResourceKind.SERVICE, "service",
            create=k8s.create_service,
            update=k8s.update_service,
            delete=k8s.delete_service,
        ),
        # TODO: give these kinds an existence check and update path like the ones above
        ResourceKind.BUILD_CONFIG: CreateOnlyReconciler(
            ResourceKind.BUILD_CONFIG, "BuildConfig", create=k8s.create_build_config,
        ),
        ResourceKind.DEPLOYMENT_CONFIG: CreateOnlyReconciler(
            ResourceKind.DEPLOYMENT_CONFIG, "DeploymentConfig", create=k8s.create_deployment_config,
        ),
        ResourceKind.IMAGE_REPOSITORY: CreateOnlyReconciler(
            ResourceKind.IMAGE_REPOSITORY, "ImageStream", create=k8s.create_image_stream,
        ),
    }


def _answer_name(answer: Any) -> str:
    if isinstance(answer, dict):
        return (answer.get("metadata") or {}).get("name", "") or str(answer)
    return str(answer)
