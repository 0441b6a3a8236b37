"""Read-only Kubernetes API wrapper."""

from __future__ import annotations

import logging
import threading

from kubernetes import client, config
from kubernetes.client import ApiException

from odh_lint.config.settings import settings
from odh_lint.core.errors import is_not_found
from odh_lint.models.resources import ResourceType

logger = logging.getLogger(__name__)


class K8sClient:
    """Thin read-only wrapper around the Kubernetes Python client.

    Only get/list operations are exposed, so checks holding this client cannot
    mutate cluster state. A missing resource (404) is reported as ``None`` / ``[]``;
    every other ApiException propagates for the executor to classify.
    """

    def __init__(self, context: str | None = None):
        self.context = context
        self._custom: client.CustomObjectsApi | None = None
        self._api_client: client.ApiClient | None = None
        # Checks reach the client from pool threads; set up the API client once.
        self._lock = threading.Lock()

    def _load_config(self) -> client.ApiClient:
        with self._lock:
            if self._api_client is None:
                self._api_client = self._build_api_client()
            return self._api_client

    def _build_api_client(self) -> client.ApiClient:
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            # Checks run concurrently; size the pool to the worker count.
            cfg.connection_pool_maxsize = max(cfg.connection_pool_maxsize or 0, settings.max_workers)
            return client.ApiClient(configuration=cfg)
        except config.ConfigException:
            config.load_incluster_config()
            return client.ApiClient()

    @property
    def custom(self) -> client.CustomObjectsApi:
        if self._custom is None:
            api_client = self._load_config()
            with self._lock:
                if self._custom is None:
                    self._custom = client.CustomObjectsApi(api_client=api_client)
        return self._custom

    @property
    def active_context_name(self) -> str:
        if self.context:
            return self.context
        try:
            _, ctx = config.list_kube_config_contexts()
            return ctx.get("name", "unknown") if ctx else "unknown"
        except Exception:
            return "in-cluster"

    def get_resource(
        self,
        resource_type: ResourceType,
        name: str,
        namespace: str | None = None,
    ) -> dict | None:
        """Get a single resource by type/name, or None if it does not exist."""
        try:
            if resource_type.namespaced and namespace:
                return self.custom.get_namespaced_custom_object(
                    group=resource_type.group,
                    version=resource_type.version,
                    namespace=namespace,
                    plural=resource_type.plural,
                    name=name,
                    _request_timeout=settings.request_timeout,
                )
            return self.custom.get_cluster_custom_object(
                group=resource_type.group,
                version=resource_type.version,
                plural=resource_type.plural,
                name=name,
                _request_timeout=settings.request_timeout,
            )
        except ApiException as e:
            if is_not_found(e):
                return None
            raise

    def list_resources(
        self,
        resource_type: ResourceType,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict]:
        """List all instances of a resource type, optionally filtered by *label_selector*.

        Returns an empty list when the resource type is not served by the cluster
        (CRD not installed).
        """
        kwargs = {"_request_timeout": settings.request_timeout}
        if label_selector:
            kwargs["label_selector"] = label_selector
        try:
            if resource_type.namespaced and namespace:
                result = self.custom.list_namespaced_custom_object(
                    group=resource_type.group,
                    version=resource_type.version,
                    namespace=namespace,
                    plural=resource_type.plural,
                    **kwargs,
                )
            else:
                result = self.custom.list_cluster_custom_object(
                    group=resource_type.group,
                    version=resource_type.version,
                    plural=resource_type.plural,
                    **kwargs,
                )
        except ApiException as e:
            if is_not_found(e):
                logger.debug("Resource type %s not served by cluster", resource_type.plural)
                return []
            raise
        return result.get("items", [])
