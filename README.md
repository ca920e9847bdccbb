# fleetview

Helpers that turn cluster resource objects into summaries that are ready to
display. The objects are plain dictionaries in the shape the cluster API
returns as JSON (`{"metadata": {...}, "spec": {...}, "status": {...}}`).
The summaries cover pod counts per phase, warning events, job and cron job
state, deployment and daemon set health, ingress hosts and service endpoints.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Modules

- `fleetview.models`: the dataclasses `Condition`, `ServicePort`, `Endpoint`,
  `Event`, `PodInfo` and `ResourceStatus`. Each has a `to_dict()` method that
  gives the camel-case JSON form. The functions are:
  - `get_service_ports(api_ports)`
  - `get_external_endpoints(service)`: returns the load balancer ingress
    addresses, for `LoadBalancer` services only, followed by the external IPs.
  - `get_internal_endpoint(service_name, namespace, ports)`: gives the host
    `name.namespace`, or just `name` when the namespace is `default` or empty.
  - `get_pod_info(current, desired, pods)`: counts pods by phase.
- `fleetview.namespaces`: `NamespaceQuery` has two methods.
  `to_request_param()` returns the single namespace, or `""` for all.
  `matches(namespace)` is true when no namespaces are given or the namespace
  is one of them. The module also has `new_same_namespace_query`,
  `new_namespace_query`, and prefix-based filtering with
  `is_filtered_namespace(item, prefixes)`,
  `filter_namespace_objects(namespaces, prefixes)` and
  `filter_namespace_names(namespaces, prefixes)`.
- `fleetview.pods`: ownership checks through controller owner references:
  `is_controlled_by`, `filter_pods_by_controller_ref`,
  `filter_deployment_pods_by_owner_reference` and `filter_pods_for_job`.
  `filter_pods_for_job` uses the namespace and the selector's `matchLabels`.
  There are container image and name helpers, with and without duplicates,
  for containers and for init containers. `equal_ignore_hash` compares two
  pod templates and ignores the `pod-template-hash` label.
- `fleetview.events`:
  - `fill_events_type`: gives `Warning` or `Normal` to events whose type is
    empty, judged by their reason.
  - `to_event`
  - `is_failed_reason(reason, *partials)`
  - `is_ready_or_succeeded(pod)`
  - `get_pods_event_warnings(events, pods)`: returns warning events that
    target pods which are not ready. Only one event is kept for each reason.
- `fleetview.jobs`:
  - `JobStatusType` (`Running`, `Complete`, `Failed`) and `JobStatus`.
  - `get_job_conditions` and `get_job_status`.
  - `get_job_pod_info(job, pods)`: takes the running, succeeded and failed
    counts from the job status.
  - `get_jobs_status(jobs, pods)`.
- `fleetview.cronjobs`:
  - `get_cronjobs_status`: counts cron jobs whose `suspend` is explicitly
    false as running and all others as failed.
  - `get_cronjob_container_images`, `filter_jobs_by_owner_uid` and
    `filter_jobs_by_state`.
  - `manual_job_name(name, suffix=None)`: shortens names to 41 characters and
    appends `-manual-` and a suffix. When no suffix is given, it uses a random
    three-character one.
  - `build_manual_job(cronjob, namespace, suffix=None)`: builds the job
    object for a manual trigger.
- `fleetview.workloads`:
  - `StatusInfo` and `RollingUpdateStrategy`.
  - `get_deployments_status` and `get_daemonsets_status`: count a workload as
    failed when its pods have warnings, as pending when any pod is pending,
    and as running otherwise.
  - `get_deployment_conditions`, `get_status_info` and
    `get_rolling_update_strategy`.
- `fleetview.network`:
  - `ServiceEndpoint`, `filter_ingress_by_service`, `get_ingress_endpoints`
    and `get_ingress_hosts`.
  - `to_endpoint_list(endpoints)`: returns `{"listMeta": {"totalItems": n},
    "endpoints": [ServiceEndpoint, ...]}` with both ready and not-ready
    addresses.

## Example

```python
from fleetview.models import get_pod_info
from fleetview.namespaces import new_same_namespace_query

pods = [
    {"metadata": {"name": "web-1"}, "status": {"phase": "Running"}},
    {"metadata": {"name": "web-2"}, "status": {"phase": "Pending"}},
]
info = get_pod_info(2, 3, pods)
print(info.running, info.pending)  # 1 1

query = new_same_namespace_query("shop")
print(query.to_request_param())    # "shop"
print(query.matches("billing"))    # False
```

## What it does not do

fleetview works only on objects you pass in. It does not connect to a
cluster, list or fetch resources, or create, trigger or delete anything.
`build_manual_job` returns a job object but does not submit it. The package
also has no command-line tool, no web server and no storage.

## Running the tests

```
pytest
```