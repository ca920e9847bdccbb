"""Status summaries and detail helpers for deployments and daemon sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from fleetview.events import get_pods_event_warnings
from fleetview.models import Condition, ResourceStatus, get_pod_info
from fleetview.pods import (
    filter_deployment_pods_by_owner_reference,
    filter_pods_by_controller_ref,
)

IntOrString = Union[int, str]


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return obj.get(key) or {}


@dataclass
class StatusInfo:
    """Replica counts of a deployment."""

    replicas: int = 0
    updated: int = 0
    available: int = 0
    unavailable: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "replicas": self.replicas,
            "updated": self.updated,
            "available": self.available,
            "unavailable": self.unavailable,
        }


@dataclass
class RollingUpdateStrategy:
    """Limits applied while a deployment rolls out new pods."""

    max_surge: Optional[IntOrString] = None
    max_unavailable: Optional[IntOrString] = None

    def to_dict(self) -> dict[str, Optional[IntOrString]]:
        return {"maxSurge": self.max_surge, "maxUnavailable": self.max_unavailable}


def _classify(status: ResourceStatus, has_warnings: bool, pending: int) -> None:
    if has_warnings:
        status.failed += 1
    elif pending > 0:
        status.pending += 1
    else:
        status.running += 1


def get_deployments_status(
    deployments: Optional[Iterable[Mapping[str, Any]]],
    replica_sets: Iterable[Mapping[str, Any]],
    pods: Iterable[Mapping[str, Any]],
    events: Iterable[Mapping[str, Any]],
) -> ResourceStatus:
    """Count deployments as failed when their pods have warnings, else pending or running."""
    result = ResourceStatus()
    if deployments is None:
        return result
    replica_sets = list(replica_sets)
    pods = list(pods)
    events = list(events)
    for deployment in deployments:
        matching = filter_deployment_pods_by_owner_reference(deployment, replica_sets, pods)
        info = get_pod_info(
            _section(deployment, "status").get("replicas", 0),
            _section(deployment, "spec").get("replicas"),
            matching,
        )
        warnings = get_pods_event_warnings(events, matching)
        _classify(result, bool(warnings), info.pending)
    return result


def get_deployment_conditions(
    conditions: Optional[Iterable[Mapping[str, Any]]],
) -> list[Condition]:
    """Convert deployment conditions; the last update time becomes the probe time."""
    return [
        Condition(
            type=condition.get("type", ""),
            status=condition.get("status", ""),
            reason=condition.get("reason", ""),
            message=condition.get("message", ""),
            last_transition_time=condition.get("lastTransitionTime"),
            last_probe_time=condition.get("lastUpdateTime"),
        )
        for condition in conditions or ()
    ]


def get_status_info(status: Mapping[str, Any]) -> StatusInfo:
    """Extract replica counts from a deployment status."""
    return StatusInfo(
        replicas=status.get("replicas", 0),
        updated=status.get("updatedReplicas", 0),
        available=status.get("availableReplicas", 0),
        unavailable=status.get("unavailableReplicas", 0),
    )


def get_rolling_update_strategy(
    deployment: Mapping[str, Any],
) -> Optional[RollingUpdateStrategy]:
    """Return the deployment's rolling update limits, or None when it has none."""
    rolling = _section(_section(deployment, "spec"), "strategy").get("rollingUpdate")
    if rolling is None:
        return None
    return RollingUpdateStrategy(
        max_surge=rolling.get("maxSurge"),
        max_unavailable=rolling.get("maxUnavailable"),
    )


def get_daemonsets_status(
    daemonsets: Optional[Iterable[Mapping[str, Any]]],
    pods: Iterable[Mapping[str, Any]],
    events: Iterable[Mapping[str, Any]],
) -> ResourceStatus:
    """Count daemon sets as failed when their pods have warnings, else pending or running."""
    result = ResourceStatus()
    if daemonsets is None:
        return result
    pods = list(pods)
    events = list(events)
    for daemonset in daemonsets:
        matching = filter_pods_by_controller_ref(daemonset, pods)
        status = _section(daemonset, "status")
        info = get_pod_info(
            status.get("currentNumberScheduled", 0),
            status.get("desiredNumberScheduled", 0),
            matching,
        )
        warnings = get_pods_event_warnings(events, matching)
        _classify(result, bool(warnings), info.pending)
    return result