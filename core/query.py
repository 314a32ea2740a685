"""Namespace-scoped prefix queries against the action index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.errors import ServiceNotFound
from core.index import PrefixIndex
from core.models import ServiceCatalog

WILDCARD = "*"


def strip_wildcards(pattern: str) -> str:
    """Remove every ``*`` from an action pattern; no glob semantics are applied."""
    return pattern.replace(WILDCARD, "")


def unique(names: Iterable[str]) -> list[str]:
    """Drop repeated names while keeping first-seen order."""
    return list(dict.fromkeys(names))


@dataclass(frozen=True, slots=True)
class PrefixQuery:
    """Build ``namespace:prefix`` queries and run them against a shared index."""

    index: PrefixIndex
    namespaces: frozenset[str]

    @classmethod
    def for_catalog(cls, catalog: ServiceCatalog, index: PrefixIndex) -> "PrefixQuery":
        return cls(index=index, namespaces=frozenset(catalog.services))

    def resolve(self, namespace: str, action_prefix: str | None = None) -> str:
        if namespace not in self.namespaces:
            raise ServiceNotFound(namespace)
        if action_prefix is None:
            return f"{namespace}:"
        return f"{namespace}:{strip_wildcards(action_prefix)}"

    def list_namespace_actions(self, namespace: str, action_prefix: str | None = None) -> list[str]:
        query = self.resolve(namespace, action_prefix)
        return unique(self.index.search_prefix(query))


def list_namespaces(catalog: ServiceCatalog) -> list[str]:
    return catalog.namespaces()


def query_namespace(
    index: PrefixIndex,
    namespace: str,
    action_prefix: str | None = None,
    namespaces: Iterable[str] | None = None,
) -> list[str]:
    """List qualified names under ``namespace``, raising ``ServiceNotFound`` for unknown ones.

    Known namespaces default to those present in the index.
    """
    known = frozenset(namespaces) if namespaces is not None else index.namespaces
    return PrefixQuery(index=index, namespaces=known).list_namespace_actions(namespace, action_prefix)


__all__ = ["PrefixQuery", "list_namespaces", "query_namespace", "strip_wildcards", "unique", "WILDCARD"]
