"""Detect the installed platform version from cluster resources."""

from __future__ import annotations

import logging

from packaging.version import Version

from odh_lint.core.errors import VersionDetectionError
from odh_lint.core.target import ResourceReader
from odh_lint.models.resources import (
    CLUSTER_SERVICE_VERSION,
    DATA_SCIENCE_CLUSTER,
    DSC_INITIALIZATION,
    ResourceType,
)
from odh_lint.utils.jsonpath import lookup_str
from odh_lint.utils.version_compare import parse_version

logger = logging.getLogger(__name__)

_RELEASE_VERSION_PATH = "status.release.version"

OPERATOR_CSV_LABEL = "operators.coreos.com/rhods-operator.redhat-ods-operator"

# Sources in priority order: (resource type, version path, label selector).
_VERSION_SOURCES: list[tuple[ResourceType, str, str | None]] = [
    (DATA_SCIENCE_CLUSTER, _RELEASE_VERSION_PATH, None),
    (DSC_INITIALIZATION, _RELEASE_VERSION_PATH, None),
    (CLUSTER_SERVICE_VERSION, "spec.version", OPERATOR_CSV_LABEL),
]


def _version_from(
    reader: ResourceReader,
    resource_type: ResourceType,
    path: str,
    label_selector: str | None = None,
) -> Version | None:
    for item in reader.list_resources(resource_type, label_selector=label_selector):
        raw = lookup_str(item, path)
        if raw is None:
            continue
        version = parse_version(raw)
        if version is None:
            logger.debug("Ignoring unparseable %s version %r", resource_type.kind, raw)
            continue
        return version
    return None


def detect_cluster_version(reader: ResourceReader) -> Version:
    """Return the platform version reported by the DataScienceCluster.

    Falls back to DSCInitialization when the DataScienceCluster is absent or
    has not reported a release yet, and then to the operator's OLM
    ClusterServiceVersion.
    """
    for resource_type, path, label_selector in _VERSION_SOURCES:
        version = _version_from(reader, resource_type, path, label_selector)
        if version is not None:
            logger.info("Detected cluster version %s from %s", version, resource_type.kind)
            return version
    raise VersionDetectionError(
        "unable to detect cluster version: no DataScienceCluster, DSCInitialization "
        "or operator ClusterServiceVersion reports a version"
    )
