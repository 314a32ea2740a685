"""Top-level package exposing the expansion API under a single import name."""

from importlib import import_module

_API = {
    "build_index": "core.index",
    "PrefixIndex": "core.index",
    "list_namespaces": "core.query",
    "query_namespace": "core.query",
    "expand_policy": "core.policy.expander",
    "parse_catalog": "core.parser.catalog",
    "parse_policy": "core.parser.policy",
    "ServiceNotFound": "core.errors",
    "MalformedActionValue": "core.errors",
}

__all__ = sorted(_API)


def __getattr__(name: str):  # pragma: no cover - delegation helper
    module = _API.get(name)
    if module is None:
        raise AttributeError(f"module 'iamexpand' has no attribute {name}")
    return getattr(import_module(module), name)


__version__ = "0.1.0"
