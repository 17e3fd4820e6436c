"""Kubernetes API wrapper."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config

from kube_applier.config.settings import settings

logger = logging.getLogger(__name__)

# (group, version, plural) for the OpenShift kinds that are only ever created
BUILD_CONFIG_API = ("build.openshift.io", "v1", "buildconfigs")
DEPLOYMENT_CONFIG_API = ("apps.openshift.io", "v1", "deploymentconfigs")
IMAGE_STREAM_API = ("image.openshift.io", "v1", "imagestreams")
PROCESSED_TEMPLATE_API = ("template.openshift.io", "v1", "processedtemplates")


class K8sClient:
    """Thin wrapper around the Kubernetes Python client."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._core_v1: client.CoreV1Api | None = None
        self._custom: client.CustomObjectsApi | None = None
        self._api_client: client.ApiClient | None = None
        self._default_namespace: str | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            self._api_client = client.ApiClient(configuration=cfg)
        except config.ConfigException:
            config.load_incluster_config()
            self._api_client = client.ApiClient()
        return self._api_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = client.CoreV1Api(api_client=self._load_config())
        return self._core_v1

    @property
    def custom(self) -> client.CustomObjectsApi:
        if self._custom is None:
            self._custom = client.CustomObjectsApi(api_client=self._load_config())
        return self._custom

    @property
    def default_namespace(self) -> str:
        """Namespace of the active kubeconfig context, else ``default``."""
        if self._default_namespace is None:
            ns = ""
            try:
                _, ctx = config.list_kube_config_contexts()
                if ctx:
                    ns = (ctx.get("context") or {}).get("namespace", "")
            except config.ConfigException:
                logger.debug("No kubeconfig context, using the default namespace")
            self._default_namespace = ns or "default"
        return self._default_namespace

    def _ns(self, namespace: str | None, body: dict | None = None) -> str:
        if namespace:
            return namespace
        if body:
            body_ns = (body.get("metadata") or {}).get("namespace")
            if body_ns:
                return body_ns
        return self.default_namespace

    def _to_dict(self, obj: Any) -> dict:
        if obj is None or isinstance(obj, dict):
            return obj
        return self._load_config().sanitize_for_serialization(obj)

    def _to_map(self, result: Any) -> dict[str, dict]:
        items: dict[str, dict] = {}
        for item in result.items:
            data = self._to_dict(item)
            name = (data.get("metadata") or {}).get("name")
            if name:
                items[name] = data
        return items

    # -- Pods ----------------------------------------------------------------

    def pod_map(self, namespace: str | None = None) -> dict[str, dict]:
        result = self.core_v1.list_namespaced_pod(
            namespace=self._ns(namespace), _request_timeout=settings.request_timeout,
        )
        return self._to_map(result)

    def create_pod(self, body: dict, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.create_namespaced_pod(
            namespace=self._ns(namespace, body), body=body,
            _request_timeout=settings.request_timeout,
        ))

    def update_pod(self, name: str, body: dict, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.replace_namespaced_pod(
            name=name, namespace=self._ns(namespace, body), body=body,
            _request_timeout=settings.request_timeout,
        ))

    def delete_pod(self, name: str, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.delete_namespaced_pod(
            name=name, namespace=self._ns(namespace),
            _request_timeout=settings.request_timeout,
        ))

    # -- Replication controllers ---------------------------------------------

    def replication_controller_map(self, namespace: str | None = None) -> dict[str, dict]:
        result = self.core_v1.list_namespaced_replication_controller(
            namespace=self._ns(namespace), _request_timeout=settings.request_timeout,
        )
        return self._to_map(result)

    def create_replication_controller(self, body: dict, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.create_namespaced_replication_controller(
            namespace=self._ns(namespace, body), body=body,
            _request_timeout=settings.request_timeout,
        ))

    def update_replication_controller(
        self, name: str, body: dict, namespace: str | None = None,
    ) -> dict:
        return self._to_dict(self.core_v1.replace_namespaced_replication_controller(
            name=name, namespace=self._ns(namespace, body), body=body,
            _request_timeout=settings.request_timeout,
        ))

    def delete_replication_controller_and_pods(
        self, name: str, namespace: str | None = None,
    ) -> dict:
        """Scale a replication controller to zero, delete its pods, then delete it."""
        ns = self._ns(namespace)
        rc = self._to_dict(self.core_v1.read_namespaced_replication_controller(
            name=name, namespace=ns, _request_timeout=settings.request_timeout,
        ))
        self.core_v1.patch_namespaced_replication_controller(
            name=name, namespace=ns, body={"spec": {"replicas": 0}},
            _request_timeout=settings.request_timeout,
        )
        selector = (rc.get("spec") or {}).get("selector") or {}
        if selector:
            label_selector = ",".join(f"{k}={v}" for k, v in sorted(selector.items()))
            pods = self.core_v1.list_namespaced_pod(
                namespace=ns, label_selector=label_selector,
                _request_timeout=settings.request_timeout,
            )
            for pod in pods.items:
                logger.debug("Deleting pod %s of replicationController %s", pod.metadata.name, name)
                self.core_v1.delete_namespaced_pod(
                    name=pod.metadata.name, namespace=ns,
                    _request_timeout=settings.request_timeout,
                )
        return self._to_dict(self.core_v1.delete_namespaced_replication_controller(
            name=name, namespace=ns, _request_timeout=settings.request_timeout,
        ))

    # -- Services ------------------------------------------------------------

    def service_map(self, namespace: str | None = None) -> dict[str, dict]:
        result = self.core_v1.list_namespaced_service(
            namespace=self._ns(namespace), _request_timeout=settings.request_timeout,
        )
        return self._to_map(result)

    def create_service(self, body: dict, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.create_namespaced_service(
            namespace=self._ns(namespace, body), body=body,
            _request_timeout=settings.request_timeout,
        ))

    def update_service(self, name: str, body: dict, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.replace_namespaced_service(
            name=name, namespace=self._ns(namespace, body), body=body,
            _request_timeout=settings.request_timeout,
        ))

    def delete_service(self, name: str, namespace: str | None = None) -> dict:
        return self._to_dict(self.core_v1.delete_namespaced_service(
            name=name, namespace=self._ns(namespace),
            _request_timeout=settings.request_timeout,
        ))

    # -- OpenShift create-only kinds -----------------------------------------

    def _create_custom(
        self, api: tuple[str, str, str], body: dict, namespace: str | None,
    ) -> dict:
        group, version, plural = api
        return self.custom.create_namespaced_custom_object(
            group=group,
            version=version,
            namespace=self._ns(namespace, body),
            plural=plural,
            body=body,
            _request_timeout=settings.request_timeout,
        )

    def create_build_config(self, body: dict, namespace: str | None = None) -> dict:
        return self._create_custom(BUILD_CONFIG_API, body, namespace)

    def create_deployment_config(self, body: dict, namespace: str | None = None) -> dict:
        return self._create_custom(DEPLOYMENT_CONFIG_API, body, namespace)

    def create_image_stream(self, body: dict, namespace: str | None = None) -> dict:
        return self._create_custom(IMAGE_STREAM_API, body, namespace)

    def create_template(self, body: dict, namespace: str | None = None) -> dict:
        """Instantiate a template server-side and return the processed template."""
        return self._create_custom(PROCESSED_TEMPLATE_API, body, namespace)
