from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest
from kubernetes import client as kube_client
from kubernetes.client import ApiException

from odh_lint.core.k8s_client import K8sClient
from odh_lint.models.resources import APP_WRAPPER, CLUSTER_SERVICE_VERSION, DATA_SCIENCE_CLUSTER


@pytest.fixture
def k8s() -> K8sClient:
    client = K8sClient(context="test")
    client._custom = MagicMock()
    return client


def test_cluster_scoped_list(k8s: K8sClient) -> None:
    k8s.custom.list_cluster_custom_object.return_value = {"items": [{"metadata": {"name": "default-dsc"}}]}
    items = k8s.list_resources(DATA_SCIENCE_CLUSTER)
    assert items == [{"metadata": {"name": "default-dsc"}}]
    kwargs = k8s.custom.list_cluster_custom_object.call_args.kwargs
    assert kwargs["group"] == "datasciencecluster.opendatahub.io"
    assert kwargs["plural"] == "datascienceclusters"


def test_namespaced_list(k8s: K8sClient) -> None:
    k8s.custom.list_namespaced_custom_object.return_value = {"items": []}
    assert k8s.list_resources(APP_WRAPPER, namespace="team-a") == []
    assert k8s.custom.list_namespaced_custom_object.call_args.kwargs["namespace"] == "team-a"


def test_missing_resource_type_lists_empty(k8s: K8sClient) -> None:
    k8s.custom.list_cluster_custom_object.side_effect = ApiException(status=404)
    assert k8s.list_resources(APP_WRAPPER) == []


def test_missing_resource_is_none(k8s: K8sClient) -> None:
    k8s.custom.get_cluster_custom_object.side_effect = ApiException(status=404)
    assert k8s.get_resource(DATA_SCIENCE_CLUSTER, "default-dsc") is None


def test_other_api_errors_propagate(k8s: K8sClient) -> None:
    k8s.custom.get_namespaced_custom_object.side_effect = ApiException(status=403)
    with pytest.raises(ApiException):
        k8s.get_resource(APP_WRAPPER, "aw", namespace="team-a")


def test_explicit_context_name() -> None:
    assert K8sClient(context="prod").active_context_name == "prod"


def test_label_selector_is_forwarded(k8s: K8sClient) -> None:
    k8s.custom.list_cluster_custom_object.return_value = {"items": []}
    k8s.list_resources(CLUSTER_SERVICE_VERSION, label_selector="app=x")
    assert k8s.custom.list_cluster_custom_object.call_args.kwargs["label_selector"] == "app=x"

    k8s.list_resources(DATA_SCIENCE_CLUSTER)
    assert "label_selector" not in k8s.custom.list_cluster_custom_object.call_args.kwargs


def test_api_client_is_built_once_across_threads(monkeypatch) -> None:
    barrier = threading.Barrier(8)
    built = []

    def _build(self):
        built.append(object())
        return MagicMock()

    monkeypatch.setattr(K8sClient, "_build_api_client", _build)
    monkeypatch.setattr(kube_client, "CustomObjectsApi", lambda api_client: MagicMock())
    k8s = K8sClient(context="test")
    seen = []

    def _worker() -> None:
        barrier.wait()
        seen.append(k8s.custom)

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert len({id(c) for c in seen}) == 1
