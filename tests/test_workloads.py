from fleetview.models import Condition, ResourceStatus
from fleetview.workloads import (
    RollingUpdateStrategy,
    StatusInfo,
    get_daemonsets_status,
    get_deployment_conditions,
    get_deployments_status,
    get_rolling_update_strategy,
    get_status_info,
)


def _owned(uid, owner_uid, **extra):
    obj = {
        "metadata": {
            "uid": uid,
            "ownerReferences": [{"uid": owner_uid, "controller": True}],
        }
    }
    obj.update(extra)
    return obj


def _pod(uid, owner_uid, phase):
    return _owned(uid, owner_uid, status={"phase": phase})


def _deployment(uid):
    return {"metadata": {"uid": uid}, "spec": {"replicas": 1}, "status": {"replicas": 1}}


def _warning(pod_uid):
    return {"reason": "FailedScheduling", "involvedObject": {"uid": pod_uid}}


def test_deployments_status_none():
    assert get_deployments_status(None, [], [], []) == ResourceStatus()


def test_deployment_running_pod_counts_running():
    deployments = [_deployment("d1")]
    rs = [_owned("rs1", "d1")]
    pods = [_pod("p1", "rs1", "Running")]
    status = get_deployments_status(deployments, rs, pods, [])
    assert status == ResourceStatus(running=len(deployments))


def test_deployment_pending_pod_counts_pending():
    deployments = [_deployment("d1")]
    rs = [_owned("rs1", "d1")]
    pods = [_pod("p1", "rs1", "Pending")]
    status = get_deployments_status(deployments, rs, pods, [])
    assert status == ResourceStatus(pending=len(deployments))


def test_deployment_with_warning_counts_failed():
    deployments = [_deployment("d1"), _deployment("d2")]
    rs = [_owned("rs1", "d1"), _owned("rs2", "d2")]
    pods = [_pod("p1", "rs1", "Pending"), _pod("p2", "rs2", "Running")]
    status = get_deployments_status(deployments, rs, pods, [_warning("p1")])
    assert status.failed == 1
    assert status.running == 1
    assert status.pending == 0


def test_deployment_status_total_matches_inputs():
    deployments = [_deployment("a"), _deployment("b"), _deployment("c")]
    status = get_deployments_status(deployments, [], [], [])
    total = status.running + status.pending + status.failed + status.succeeded
    assert total == len(deployments)


def test_deployment_conditions_use_last_update_time_as_probe():
    raw = [
        {
            "type": "Available",
            "status": "True",
            "reason": "MinimumReplicasAvailable",
            "message": "ok",
            "lastTransitionTime": "2024-01-01T00:00:00Z",
            "lastUpdateTime": "2024-01-02T00:00:00Z",
        }
    ]
    assert get_deployment_conditions(raw) == [
        Condition(
            type="Available",
            status="True",
            reason="MinimumReplicasAvailable",
            message="ok",
            last_transition_time="2024-01-01T00:00:00Z",
            last_probe_time="2024-01-02T00:00:00Z",
        )
    ]


def test_deployment_conditions_empty():
    assert get_deployment_conditions(None) == []


def test_status_info_from_status():
    status = {
        "replicas": 5,
        "updatedReplicas": 4,
        "availableReplicas": 3,
        "unavailableReplicas": 2,
    }
    info = get_status_info(status)
    assert info == StatusInfo(replicas=5, updated=4, available=3, unavailable=2)
    assert info.to_dict()["unavailable"] == status["unavailableReplicas"]


def test_rolling_update_strategy_absent():
    assert get_rolling_update_strategy({"spec": {"strategy": {"type": "Recreate"}}}) is None


def test_rolling_update_strategy_present():
    deployment = {
        "spec": {"strategy": {"rollingUpdate": {"maxSurge": "25%", "maxUnavailable": 1}}}
    }
    strategy = get_rolling_update_strategy(deployment)
    assert strategy == RollingUpdateStrategy(max_surge="25%", max_unavailable=1)
    assert strategy.to_dict() == {"maxSurge": "25%", "maxUnavailable": 1}


def test_daemonsets_status_none():
    assert get_daemonsets_status(None, [], []) == ResourceStatus()


def test_daemonsets_status_classification():
    daemonsets = [
        {"metadata": {"uid": "ds1"}, "status": {"currentNumberScheduled": 1}},
        {"metadata": {"uid": "ds2"}, "status": {"currentNumberScheduled": 1}},
        {"metadata": {"uid": "ds3"}, "status": {"currentNumberScheduled": 1}},
    ]
    pods = [
        _pod("p1", "ds1", "Running"),
        _pod("p2", "ds2", "Pending"),
        _pod("p3", "ds3", "Pending"),
    ]
    status = get_daemonsets_status(daemonsets, pods, [_warning("p3")])
    assert status == ResourceStatus(running=1, pending=1, failed=1)