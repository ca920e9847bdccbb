"""Cron job status, owned job selection and manual triggering."""

from __future__ import annotations

import copy
import random
from typing import Any, Iterable, Mapping, Optional

from fleetview.models import ResourceStatus

CRONJOB_API_VERSION = "v1"
CRONJOB_KIND_NAME = "cronjob"
INSTANTIATE_ANNOTATION = "cronjob.kubernetes.io/instantiate"
MANUAL_SUFFIX = "-manual-"
# Job names may not exceed 52 characters.
_MAX_PREFIX = 41
_SUFFIX_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"
_SUFFIX_LENGTH = 3


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return obj.get(key) or {}


def get_cronjobs_status(cronjobs: Optional[Iterable[Mapping[str, Any]]]) -> ResourceStatus:
    """Count cron jobs explicitly not suspended as running and all others as failed."""
    result = ResourceStatus()
    if cronjobs is None:
        return result
    for cronjob in cronjobs:
        suspend = _section(cronjob, "spec").get("suspend")
        if suspend is not None and not suspend:
            result.running += 1
        else:
            result.failed += 1
    return result


def get_cronjob_container_images(cronjob: Mapping[str, Any]) -> list[str]:
    """Return the container images of the cron job's job template."""
    job_template = _section(_section(cronjob, "spec"), "jobTemplate")
    pod_spec = _section(_section(_section(job_template, "spec"), "template"), "spec")
    return [c.get("image", "") for c in pod_spec.get("containers") or ()]


def filter_jobs_by_owner_uid(
    uid: str, jobs: Iterable[Mapping[str, Any]]
) -> list[Mapping[str, Any]]:
    """Return the jobs with an owner reference to the given UID."""
    return [
        job
        for job in jobs
        if any(
            ref.get("uid", "") == uid
            for ref in _section(job, "metadata").get("ownerReferences") or ()
        )
    ]


def filter_jobs_by_state(
    active: bool, jobs: Iterable[Mapping[str, Any]]
) -> list[Mapping[str, Any]]:
    """Return the active jobs when active is True, otherwise the inactive ones."""
    return [
        job
        for job in jobs
        if (_section(job, "status").get("active", 0) > 0) == bool(active)
    ]


def _random_suffix() -> str:
    return "".join(random.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))


def manual_job_name(name: str, suffix: Optional[str] = None) -> str:
    """Name a manually triggered job, shortening long cron job names."""
    if suffix is None:
        suffix = _random_suffix()
    prefix = name if len(name) <= _MAX_PREFIX else name[:_MAX_PREFIX]
    return prefix + MANUAL_SUFFIX + suffix


def build_manual_job(
    cronjob: Mapping[str, Any], namespace: str, suffix: Optional[str] = None
) -> dict[str, Any]:
    """Build the job that a manual trigger of the cron job creates."""
    metadata = _section(cronjob, "metadata")
    job_template = _section(_section(cronjob, "spec"), "jobTemplate")
    name = metadata.get("name", "")
    return {
        "metadata": {
            "name": manual_job_name(name, suffix),
            "namespace": namespace,
            "annotations": {INSTANTIATE_ANNOTATION: "manual"},
            "labels": dict(_section(job_template, "metadata").get("labels") or {}),
            "ownerReferences": [
                {
                    "apiVersion": CRONJOB_API_VERSION,
                    "kind": CRONJOB_KIND_NAME,
                    "name": name,
                    "uid": metadata.get("uid", ""),
                }
            ],
        },
        "spec": copy.deepcopy(dict(_section(job_template, "spec"))),
    }