"""Presentation models shared by resource views: conditions, endpoints, events and pod summaries.

Kubernetes objects are taken as plain mappings shaped like the API's JSON
(``{"metadata": {...}, "spec": {...}, "status": {...}}``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

NAMESPACE_DEFAULT = "default"
SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"

POD_RUNNING = "Running"
POD_PENDING = "Pending"
POD_FAILED = "Failed"
POD_SUCCEEDED = "Succeeded"


def _lookup(obj: Any, *path: str) -> Any:
    """Walk nested mappings, returning None as soon as a key is missing."""
    for key in path:
        if not isinstance(obj, Mapping):
            return None
        obj = obj.get(key)
    return obj


@dataclass
class Condition:
    """A single condition of a pod, node or workload."""

    type: str = ""
    status: str = ""
    last_probe_time: Optional[str] = None
    last_transition_time: Optional[str] = None
    reason: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "status": self.status,
            "lastProbeTime": self.last_probe_time,
            "lastTransitionTime": self.last_transition_time,
            "reason": self.reason,
            "message": self.message,
        }


@dataclass
class ServicePort:
    """A port and protocol pair exposed by a service."""

    port: int = 0
    protocol: str = ""
    node_port: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"port": self.port, "protocol": self.protocol, "nodePort": self.node_port}


@dataclass
class Endpoint:
    """A host together with the ports open on it."""

    host: str = ""
    ports: list[ServicePort] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"host": self.host, "ports": [p.to_dict() for p in self.ports]}


@dataclass
class Event:
    """A single event as shown to the user."""

    object_meta: dict[str, Any] = field(default_factory=dict)
    type_meta: dict[str, Any] = field(default_factory=dict)
    message: str = ""
    source_component: str = ""
    source_host: str = ""
    sub_object: str = ""
    sub_object_kind: str = ""
    sub_object_name: str = ""
    sub_object_namespace: str = ""
    count: int = 0
    first_seen: Optional[str] = None
    last_seen: Optional[str] = None
    reason: str = ""
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "objectMeta": self.object_meta,
            "typeMeta": self.type_meta,
            "message": self.message,
            "sourceComponent": self.source_component,
            "sourceHost": self.source_host,
            "object": self.sub_object,
        }
        optional = {
            "objectKind": self.sub_object_kind,
            "objectName": self.sub_object_name,
            "objectNamespace": self.sub_object_namespace,
        }
        result.update({key: value for key, value in optional.items() if value})
        result.update(
            {
                "count": self.count,
                "firstSeen": self.first_seen,
                "lastSeen": self.last_seen,
                "reason": self.reason,
                "type": self.type,
            }
        )
        return result


@dataclass
class PodInfo:
    """Aggregate information about a controller's pods."""

    current: int = 0
    desired: Optional[int] = None
    running: int = 0
    pending: int = 0
    failed: int = 0
    succeeded: int = 0
    warnings: list[Event] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"current": self.current}
        if self.desired is not None:
            result["desired"] = self.desired
        result.update(
            {
                "running": self.running,
                "pending": self.pending,
                "failed": self.failed,
                "succeeded": self.succeeded,
                "warnings": [w.to_dict() for w in self.warnings],
            }
        )
        return result


@dataclass
class ResourceStatus:
    """Counts of resources in each state across a list."""

    running: int = 0
    pending: int = 0
    failed: int = 0
    succeeded: int = 0
    terminating: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "running": self.running,
            "pending": self.pending,
            "failed": self.failed,
            "succeeded": self.succeeded,
            "terminating": self.terminating,
        }


def get_service_ports(api_ports: Optional[Iterable[Mapping[str, Any]]]) -> list[ServicePort]:
    """Convert API service ports into ServicePort values."""
    return [
        ServicePort(
            port=port.get("port", 0),
            protocol=port.get("protocol", ""),
            node_port=port.get("nodePort", 0),
        )
        for port in api_ports or ()
    ]


def _external_endpoint(ingress: Mapping[str, Any], ports: Any) -> Endpoint:
    host = ingress.get("hostname") or ingress.get("ip", "")
    return Endpoint(host=host, ports=get_service_ports(ports))


def get_external_endpoints(service: Mapping[str, Any]) -> list[Endpoint]:
    """Return the endpoints through which a service is reachable from outside."""
    spec = service.get("spec") or {}
    ports = spec.get("ports")
    endpoints: list[Endpoint] = []
    if spec.get("type") == SERVICE_TYPE_LOAD_BALANCER:
        ingresses = _lookup(service, "status", "loadBalancer", "ingress") or ()
        endpoints.extend(_external_endpoint(ingress, ports) for ingress in ingresses)
    endpoints.extend(
        Endpoint(host=ip, ports=get_service_ports(ports)) for ip in spec.get("externalIPs") or ()
    )
    return endpoints


def get_internal_endpoint(
    service_name: str, namespace: str, ports: Optional[Iterable[Mapping[str, Any]]]
) -> Endpoint:
    """Return the in-cluster endpoint, e.g. ``my-service.namespace`` or ``my-service``."""
    name = service_name
    if namespace != NAMESPACE_DEFAULT and namespace and service_name:
        name = f"{service_name}.{namespace}"
    return Endpoint(host=name, ports=get_service_ports(ports))


def get_pod_info(
    current: int, desired: Optional[int], pods: Iterable[Mapping[str, Any]]
) -> PodInfo:
    """Summarise a group of pods by phase."""
    info = PodInfo(current=current, desired=desired)
    for pod in pods:
        phase = _lookup(pod, "status", "phase")
        if phase == POD_RUNNING:
            info.running += 1
        elif phase == POD_PENDING:
            info.pending += 1
        elif phase == POD_FAILED:
            info.failed += 1
        elif phase == POD_SUCCEEDED:
            info.succeeded += 1
    return info