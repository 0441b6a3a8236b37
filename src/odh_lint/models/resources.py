"""Kubernetes resource types read by checks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceType:
    group: str
    version: str
    kind: str
    plural: str
    namespaced: bool = True

    @property
    def api_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


DATA_SCIENCE_CLUSTER = ResourceType(
    group="datasciencecluster.opendatahub.io",
    version="v1",
    kind="DataScienceCluster",
    plural="datascienceclusters",
    namespaced=False,
)

DSC_INITIALIZATION = ResourceType(
    group="dscinitialization.opendatahub.io",
    version="v1",
    kind="DSCInitialization",
    plural="dscinitializations",
    namespaced=False,
)

APP_WRAPPER = ResourceType(
    group="workload.codeflare.dev",
    version="v1beta2",
    kind="AppWrapper",
    plural="appwrappers",
)

CLUSTER_SERVICE_VERSION = ResourceType(
    group="operators.coreos.com",
    version="v1alpha1",
    kind="ClusterServiceVersion",
    plural="clusterserviceversions",
)
