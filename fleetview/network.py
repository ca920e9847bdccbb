"""Ingress selection and service endpoint views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from fleetview.models import Endpoint

RESOURCE_KIND_SERVICE = "service"
RESOURCE_KIND_ENDPOINT = "endpoint"


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return obj.get(key) or {}


@dataclass
class ServiceEndpoint:
    """A single address of a service together with its ports and readiness."""

    object_meta: dict[str, Any] = field(default_factory=dict)
    type_meta: dict[str, Any] = field(default_factory=lambda: {"kind": RESOURCE_KIND_ENDPOINT})
    host: str = ""
    node_name: Optional[str] = None
    ready: bool = False
    ports: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "objectMeta": self.object_meta,
            "typeMeta": self.type_meta,
            "host": self.host,
            "nodeName": self.node_name,
            "ready": self.ready,
            "ports": self.ports,
        }


def _backend_matches(backend: Optional[Mapping[str, Any]], service_name: str) -> bool:
    if backend is None:
        return False
    service = backend.get("service")
    if service is not None and service.get("name", "") == service_name:
        return True
    resource = backend.get("resource")
    return (
        resource is not None
        and resource.get("kind", "") == RESOURCE_KIND_SERVICE
        and resource.get("name", "") == service_name
    )


def _ingress_matches(ingress: Mapping[str, Any], service_name: str) -> bool:
    spec = _section(ingress, "spec")
    if _backend_matches(spec.get("defaultBackend"), service_name):
        return True
    for rule in spec.get("rules") or ():
        http = rule.get("http")
        if http is None:
            continue
        if any(
            _backend_matches(path.get("backend") or {}, service_name)
            for path in http.get("paths") or ()
        ):
            return True
    return False


def filter_ingress_by_service(
    ingresses: Iterable[Mapping[str, Any]], service_name: str
) -> list[Mapping[str, Any]]:
    """Return the ingresses with a backend pointing at the named service."""
    return [ingress for ingress in ingresses if _ingress_matches(ingress, service_name)]


def get_ingress_endpoints(ingress: Mapping[str, Any]) -> list[Endpoint]:
    """Return the load balancer addresses of an ingress, hostname preferred over IP."""
    statuses = _section(_section(ingress, "status"), "loadBalancer").get("ingress") or ()
    return [
        Endpoint(host=status.get("hostname") or status.get("ip") or "")
        for status in statuses
    ]


def get_ingress_hosts(ingress: Mapping[str, Any]) -> list[str]:
    """Return the distinct non-empty rule hosts of an ingress in order."""
    hosts = (rule.get("host", "") for rule in _section(ingress, "spec").get("rules") or ())
    return [host for host in dict.fromkeys(hosts) if host]


def _to_service_endpoint(
    address: Mapping[str, Any], ports: list[dict[str, Any]], ready: bool
) -> ServiceEndpoint:
    return ServiceEndpoint(
        host=address.get("ip", ""),
        node_name=address.get("nodeName"),
        ready=ready,
        ports=ports,
    )


def to_endpoint_list(endpoints: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Flatten API Endpoints objects into ready and not-ready service endpoints.

    The result holds ``listMeta`` with the number of Endpoints objects given and
    ``endpoints``, a list of ServiceEndpoint values.
    """
    endpoints = list(endpoints)
    result: list[ServiceEndpoint] = []
    for endpoint in endpoints:
        for subset in endpoint.get("subsets") or ():
            ports = list(subset.get("ports") or ())
            result.extend(
                _to_service_endpoint(address, ports, True)
                for address in subset.get("addresses") or ()
            )
            result.extend(
                _to_service_endpoint(address, ports, False)
                for address in subset.get("notReadyAddresses") or ()
            )
    return {"listMeta": {"totalItems": len(endpoints)}, "endpoints": result}