"""Job status inference, job conditions and pod summaries for jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from fleetview.models import Condition, PodInfo, ResourceStatus, get_pod_info
from fleetview.pods import filter_pods_for_job

JOB_CONDITION_COMPLETE = "Complete"
JOB_CONDITION_FAILED = "Failed"
CONDITION_TRUE = "True"


class JobStatusType(str, Enum):
    """Inferred state of a job."""

    RUNNING = "Running"
    COMPLETE = "Complete"
    FAILED = "Failed"


@dataclass
class JobStatus:
    """Job status inferred from the job's conditions."""

    status: JobStatusType = JobStatusType.RUNNING
    message: str = ""
    conditions: list[Condition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "conditions": [c.to_dict() for c in self.conditions],
        }


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return obj.get(key) or {}


def _raw_conditions(job: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    return _section(job, "status").get("conditions") or ()


def get_job_conditions(job: Mapping[str, Any]) -> list[Condition]:
    """Convert the job's status conditions into Condition values."""
    return [
        Condition(
            type=condition.get("type", ""),
            status=condition.get("status", ""),
            last_probe_time=condition.get("lastProbeTime"),
            last_transition_time=condition.get("lastTransitionTime"),
            reason=condition.get("reason", ""),
            message=condition.get("message", ""),
        )
        for condition in _raw_conditions(job)
    ]


def get_job_status(job: Mapping[str, Any]) -> JobStatus:
    """Infer the job's status from the first true Complete or Failed condition."""
    result = JobStatus(conditions=get_job_conditions(job))
    for condition in _raw_conditions(job):
        if condition.get("status") != CONDITION_TRUE:
            continue
        kind = condition.get("type")
        if kind == JOB_CONDITION_COMPLETE:
            result.status = JobStatusType.COMPLETE
            break
        if kind == JOB_CONDITION_FAILED:
            result.status = JobStatusType.FAILED
            result.message = condition.get("message", "")
            break
    return result


def get_job_pod_info(job: Mapping[str, Any], pods: Iterable[Mapping[str, Any]]) -> PodInfo:
    """Summarise the job's pods, taking running, succeeded and failed from the job status."""
    status = _section(job, "status")
    completions: Optional[int] = _section(job, "spec").get("completions")
    info = get_pod_info(status.get("active", 0), completions, pods)
    info.running = status.get("active", 0)
    info.succeeded = status.get("succeeded", 0)
    info.failed = status.get("failed", 0)
    return info


def get_jobs_status(
    jobs: Optional[Iterable[Mapping[str, Any]]], pods: Iterable[Mapping[str, Any]]
) -> ResourceStatus:
    """Count jobs by state: failed, succeeded, running when a pod runs, else pending."""
    result = ResourceStatus()
    if jobs is None:
        return result
    pods = list(pods)
    for job in jobs:
        matching = filter_pods_for_job(job, pods)
        info = get_pod_info(
            _section(job, "status").get("active", 0),
            _section(job, "spec").get("completions"),
            matching,
        )
        status = get_job_status(job).status
        if status is JobStatusType.FAILED:
            result.failed += 1
        elif status is JobStatusType.COMPLETE:
            result.succeeded += 1
        elif info.running > 0:
            result.running += 1
        else:
            result.pending += 1
    return result