"""Event type inference, event conversion and pod warning extraction."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fleetview.models import POD_RUNNING, POD_SUCCEEDED, Event

EVENT_TYPE_NORMAL = "Normal"
EVENT_TYPE_WARNING = "Warning"
EVENT_KIND = "event"

POD_READY = "Ready"
CONDITION_FALSE = "False"

# Lower case partial reasons that mark an event as a warning.
FAILED_REASON_PARTIALS = (
    "failed",
    "err",
    "exceeded",
    "invalid",
    "unhealthy",
    "mismatch",
    "insufficient",
    "conflict",
    "outof",
    "nil",
    "backoff",
)


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return obj.get(key) or {}


def is_failed_reason(reason: str, *args: str) -> bool:
    """Return True when the reason contains any of the given lower case partials."""
    lowered = reason.lower()
    return any(partial in lowered for partial in args)


def fill_events_type(events: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return the events with an empty type inferred from the reason."""
    result = []
    for event in events:
        filled = dict(event)
        if not filled.get("type"):
            if is_failed_reason(filled.get("reason", ""), *FAILED_REASON_PARTIALS):
                filled["type"] = EVENT_TYPE_WARNING
            else:
                filled["type"] = EVENT_TYPE_NORMAL
        result.append(filled)
    return result


def to_event(event: Mapping[str, Any]) -> Event:
    """Convert an API event into the presentation Event."""
    first_seen = event.get("firstTimestamp") or None
    last_seen = event.get("lastTimestamp") or None
    if first_seen is None:
        first_seen = event.get("eventTime") or None
    if last_seen is None:
        last_seen = first_seen

    source = _section(event, "source")
    involved = _section(event, "involvedObject")
    return Event(
        object_meta=dict(_section(event, "metadata")),
        type_meta={"kind": EVENT_KIND},
        message=event.get("message", ""),
        source_component=source.get("component", ""),
        source_host=source.get("host", ""),
        sub_object=involved.get("fieldPath", ""),
        sub_object_kind=involved.get("kind", ""),
        sub_object_name=involved.get("name", ""),
        sub_object_namespace=involved.get("namespace", ""),
        count=event.get("count", 0),
        first_seen=first_seen,
        last_seen=last_seen,
        reason=event.get("reason", ""),
        type=event.get("type", ""),
    )


def is_ready_or_succeeded(pod: Mapping[str, Any]) -> bool:
    """Return True when the pod has succeeded, or runs without a false Ready condition."""
    status = _section(pod, "status")
    phase = status.get("phase")
    if phase == POD_SUCCEEDED:
        return True
    if phase == POD_RUNNING:
        return not any(
            condition.get("type") == POD_READY and condition.get("status") == CONDITION_FALSE
            for condition in status.get("conditions") or ()
        )
    return False


def _filter_events_by_pods_uid(
    events: list[dict[str, Any]], pods: list[Mapping[str, Any]]
) -> list[dict[str, Any]]:
    if not pods or not events:
        return []
    uids = {_section(pod, "metadata").get("uid", "") for pod in pods}
    return [e for e in events if _section(e, "involvedObject").get("uid", "") in uids]


def _remove_duplicate_reasons(events: list[dict[str, Any]]) -> list[dict[str, Any]]:
    seen: set[str] = set()
    result = []
    for event in events:
        reason = event.get("reason", "")
        if reason not in seen:
            seen.add(reason)
            result.append(event)
    return result


def get_pods_event_warnings(
    events: Iterable[Mapping[str, Any]], pods: Iterable[Mapping[str, Any]]
) -> list[Event]:
    """Return unique-by-reason warning events that target pods which are not healthy."""
    warnings = [e for e in fill_events_type(events) if e["type"] == EVENT_TYPE_WARNING]
    failed_pods = [pod for pod in pods if not is_ready_or_succeeded(pod)]
    targeted = _remove_duplicate_reasons(_filter_events_by_pods_uid(warnings, failed_pods))
    return [
        Event(
            message=event.get("message", ""),
            reason=event.get("reason", ""),
            type=event["type"],
        )
        for event in targeted
    ]