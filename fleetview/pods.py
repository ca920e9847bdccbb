"""Pod selection by owner, job selector and container helpers.

Objects are plain mappings shaped like the Kubernetes API's JSON.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional

DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY = "pod-template-hash"


def _metadata(obj: Mapping[str, Any]) -> Mapping[str, Any]:
    return obj.get("metadata") or {}


def _spec(obj: Mapping[str, Any]) -> Mapping[str, Any]:
    return obj.get("spec") or {}


def _controller_ref(obj: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """Return the first owner reference marked as the controller."""
    for ref in _metadata(obj).get("ownerReferences") or ():
        if ref.get("controller"):
            return ref
    return None


def is_controlled_by(obj: Mapping[str, Any], owner: Mapping[str, Any]) -> bool:
    """Return True when the object's controller reference points at the owner's UID."""
    ref = _controller_ref(obj)
    if ref is None:
        return False
    return ref.get("uid", "") == _metadata(owner).get("uid", "")


def filter_pods_by_controller_ref(
    owner: Mapping[str, Any], pods: Iterable[Mapping[str, Any]]
) -> list[Mapping[str, Any]]:
    """Return the pods controlled by the given owner."""
    return [pod for pod in pods if is_controlled_by(pod, owner)]


def filter_deployment_pods_by_owner_reference(
    deployment: Mapping[str, Any],
    replica_sets: Iterable[Mapping[str, Any]],
    pods: Iterable[Mapping[str, Any]],
) -> list[Mapping[str, Any]]:
    """Return the pods of every replica set controlled by the deployment."""
    pods = list(pods)
    matching: list[Mapping[str, Any]] = []
    for replica_set in replica_sets:
        if is_controlled_by(replica_set, deployment):
            matching.extend(filter_pods_by_controller_ref(replica_set, pods))
    return matching


def _matches_selector(labels: Mapping[str, str], match_labels: Mapping[str, str]) -> bool:
    return all(labels.get(key, "") == value for key, value in match_labels.items())


def filter_pods_for_job(
    job: Mapping[str, Any], pods: Iterable[Mapping[str, Any]]
) -> list[Mapping[str, Any]]:
    """Return the pods in the job's namespace that match its selector labels."""
    namespace = _metadata(job).get("namespace", "")
    match_labels = (_spec(job).get("selector") or {}).get("matchLabels") or {}
    return [
        pod
        for pod in pods
        if _metadata(pod).get("namespace", "") == namespace
        and _matches_selector(_metadata(pod).get("labels") or {}, match_labels)
    ]


def _containers(pod_spec: Mapping[str, Any], key: str) -> Iterable[Mapping[str, Any]]:
    return pod_spec.get(key) or ()


def get_container_images(pod_spec: Mapping[str, Any]) -> list[str]:
    """Return the images of the pod spec's containers."""
    return [c.get("image", "") for c in _containers(pod_spec, "containers")]


def get_init_container_images(pod_spec: Mapping[str, Any]) -> list[str]:
    """Return the images of the pod spec's init containers."""
    return [c.get("image", "") for c in _containers(pod_spec, "initContainers")]


def get_container_names(pod_spec: Mapping[str, Any]) -> list[str]:
    """Return the names of the pod spec's containers."""
    return [c.get("name", "") for c in _containers(pod_spec, "containers")]


def get_init_container_names(pod_spec: Mapping[str, Any]) -> list[str]:
    """Return the names of the pod spec's init containers."""
    return [c.get("name", "") for c in _containers(pod_spec, "initContainers")]


def _unique(values: Iterator[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _pod_field(pods: Iterable[Mapping[str, Any]], key: str, attr: str) -> Iterator[str]:
    for pod in pods:
        for container in _containers(_spec(pod), key):
            yield container.get(attr, "")


def get_nonduplicate_container_images(pods: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return container images across pods, first occurrence order, without duplicates."""
    return _unique(_pod_field(pods, "containers", "image"))


def get_nonduplicate_init_container_images(pods: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return init container images across pods without duplicates."""
    return _unique(_pod_field(pods, "initContainers", "image"))


def get_nonduplicate_container_names(pods: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return container names across pods without duplicates."""
    return _unique(_pod_field(pods, "containers", "name"))


def get_nonduplicate_init_container_names(pods: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return init container names across pods without duplicates."""
    return _unique(_pod_field(pods, "initContainers", "name"))


def _normalize(value: Any) -> Any:
    """Drop unset and empty entries so that absent and empty compare equal."""
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            normalized = _normalize(item)
            if normalized is None or normalized == {} or normalized == []:
                continue
            result[key] = normalized
        return result
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def _without_labels(template: Mapping[str, Any]) -> dict[str, Any]:
    stripped = dict(template)
    metadata = dict(_metadata(template))
    metadata.pop("labels", None)
    stripped["metadata"] = metadata
    return stripped


def equal_ignore_hash(template1: Mapping[str, Any], template2: Mapping[str, Any]) -> bool:
    """Compare two pod template specs, ignoring the pod-template-hash label."""
    labels1 = _metadata(template1).get("labels") or {}
    labels2 = _metadata(template2).get("labels") or {}
    if len(labels1) > len(labels2):
        labels1, labels2 = labels2, labels1
    for key, value in labels2.items():
        if labels1.get(key, "") != value and key != DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY:
            return False
    return _normalize(_without_labels(template1)) == _normalize(_without_labels(template2))