"""Summaries of cluster workloads, pods, events and network resources for display."""

__version__ = "0.1.0"
__all__ = [
    "cronjobs",
    "events",
    "jobs",
    "models",
    "namespaces",
    "network",
    "pods",
    "workloads",
]