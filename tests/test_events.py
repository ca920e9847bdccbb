import pytest

from fleetview import events as ev
from fleetview.models import POD_PENDING, POD_RUNNING, POD_SUCCEEDED


@pytest.mark.parametrize("reason", ["FailedScheduling", "BackOff", "ErrImagePull", "Unhealthy"])
def test_is_failed_reason_true(reason):
    assert ev.is_failed_reason(reason, *ev.FAILED_REASON_PARTIALS) is True


@pytest.mark.parametrize("reason", ["Scheduled", "Pulled", "Started", ""])
def test_is_failed_reason_false(reason):
    assert ev.is_failed_reason(reason, *ev.FAILED_REASON_PARTIALS) is False


def test_is_failed_reason_without_partials():
    assert ev.is_failed_reason("FailedScheduling") is False


def test_fill_events_type():
    events = [
        {"reason": "FailedMount"},
        {"reason": "Pulled"},
        {"reason": "FailedMount", "type": ev.EVENT_TYPE_NORMAL},
    ]
    filled = ev.fill_events_type(events)
    assert [e["type"] for e in filled] == [
        ev.EVENT_TYPE_WARNING,
        ev.EVENT_TYPE_NORMAL,
        ev.EVENT_TYPE_NORMAL,
    ]
    assert "type" not in events[0]


def test_to_event_copies_fields():
    raw = {
        "metadata": {"name": "e1", "namespace": "ns"},
        "message": "msg",
        "source": {"component": "kubelet", "host": "node-a"},
        "involvedObject": {"fieldPath": "spec.containers{web}", "kind": "Pod", "name": "p", "namespace": "ns"},
        "count": 3,
        "firstTimestamp": "2024-01-01T00:00:00Z",
        "lastTimestamp": "2024-01-02T00:00:00Z",
        "reason": "Pulled",
        "type": ev.EVENT_TYPE_NORMAL,
    }
    event = ev.to_event(raw)
    assert event.object_meta == raw["metadata"]
    assert event.type_meta == {"kind": ev.EVENT_KIND}
    assert event.source_component == "kubelet"
    assert event.source_host == "node-a"
    assert event.sub_object == "spec.containers{web}"
    assert event.sub_object_kind == "Pod"
    assert event.count == 3
    assert event.first_seen == raw["firstTimestamp"]
    assert event.last_seen == raw["lastTimestamp"]
    assert event.reason == "Pulled"


def test_to_event_timestamp_fallbacks():
    raw = {"eventTime": "2024-03-03T10:00:00.000000Z"}
    event = ev.to_event(raw)
    assert event.first_seen == raw["eventTime"]
    assert event.last_seen == raw["eventTime"]


def test_to_event_last_falls_back_to_first():
    raw = {"firstTimestamp": "2024-01-01T00:00:00Z"}
    event = ev.to_event(raw)
    assert event.last_seen == raw["firstTimestamp"]


def pod(uid, phase, conditions=None):
    return {"metadata": {"uid": uid}, "status": {"phase": phase, "conditions": conditions or []}}


def test_is_ready_or_succeeded():
    assert ev.is_ready_or_succeeded(pod("a", POD_SUCCEEDED)) is True
    assert ev.is_ready_or_succeeded(pod("a", POD_RUNNING)) is True
    assert ev.is_ready_or_succeeded(
        pod("a", POD_RUNNING, [{"type": ev.POD_READY, "status": "True"}])
    ) is True
    assert ev.is_ready_or_succeeded(
        pod("a", POD_RUNNING, [{"type": ev.POD_READY, "status": ev.CONDITION_FALSE}])
    ) is False
    assert ev.is_ready_or_succeeded(pod("a", POD_PENDING)) is False


def event(uid, reason, message="", type_=""):
    return {"involvedObject": {"uid": uid}, "reason": reason, "message": message, "type": type_}


def test_get_pods_event_warnings_filters_and_dedups():
    pods = [pod("bad", POD_PENDING), pod("good", POD_RUNNING)]
    events = [
        event("bad", "FailedScheduling", "first"),
        event("bad", "FailedScheduling", "second"),
        event("bad", "Scheduled", "normal one"),
        event("good", "BackOff", "healthy pod"),
        event("bad", "Custom", "explicit", ev.EVENT_TYPE_WARNING),
    ]
    warnings = ev.get_pods_event_warnings(events, pods)
    assert [(w.reason, w.message) for w in warnings] == [
        ("FailedScheduling", "first"),
        ("Custom", "explicit"),
    ]
    assert all(w.type == ev.EVENT_TYPE_WARNING for w in warnings)
    assert len({w.reason for w in warnings}) == len(warnings)


def test_get_pods_event_warnings_no_failed_pods():
    pods = [pod("ok", POD_SUCCEEDED)]
    assert ev.get_pods_event_warnings([event("ok", "FailedMount")], pods) == []


def test_get_pods_event_warnings_no_pods():
    assert ev.get_pods_event_warnings([event("x", "FailedMount")], []) == []