"""Namespace queries and prefix-based namespace filtering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

NAMESPACE_ALL = ""


@dataclass(frozen=True)
class NamespaceQuery:
    """A query over the namespaces of a list of objects.

    No namespaces means every namespace matches; exactly one lets the backend
    be queried for that namespace alone; several are queried across all
    namespaces and filtered afterwards.
    """

    namespaces: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespaces", tuple(self.namespaces))

    def to_request_param(self) -> str:
        """Return the namespace to send to the API: the single one, or all."""
        if len(self.namespaces) == 1:
            return self.namespaces[0]
        return NAMESPACE_ALL

    def matches(self, namespace: str) -> bool:
        """Return True when the namespace is selected by this query."""
        return not self.namespaces or namespace in self.namespaces


def new_same_namespace_query(namespace: str) -> NamespaceQuery:
    """Create a query for one namespace."""
    return NamespaceQuery((namespace,))


def new_namespace_query(namespaces: Iterable[str]) -> NamespaceQuery:
    """Create a query for the given namespaces."""
    return NamespaceQuery(tuple(namespaces))


def is_filtered_namespace(item: str, prefixes: Iterable[str]) -> bool:
    """Return True when the name starts with any of the filtered prefixes."""
    return any(item.startswith(prefix) for prefix in prefixes)


def filter_namespace_objects(
    namespaces: Iterable[Mapping[str, Any]], prefixes: Iterable[str]
) -> list[Mapping[str, Any]]:
    """Drop namespace objects whose name starts with a filtered prefix."""
    prefixes = tuple(prefixes)
    return [
        ns
        for ns in namespaces
        if not is_filtered_namespace((ns.get("metadata") or {}).get("name", ""), prefixes)
    ]


def filter_namespace_names(namespaces: Iterable[str], prefixes: Iterable[str]) -> list[str]:
    """Drop namespace names that start with a filtered prefix."""
    prefixes = tuple(prefixes)
    return [ns for ns in namespaces if not is_filtered_namespace(ns, prefixes)]