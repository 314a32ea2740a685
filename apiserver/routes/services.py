"""API routes for listing services and their actions."""

from __future__ import annotations

from typing import Any

from apiserver.routes import catalog as catalog_source
from core.errors import ServiceNotFound
from core.query import PrefixQuery, list_namespaces


def handle_list(event: dict[str, Any]) -> dict[str, Any]:
    catalog, _ = catalog_source.load_index()
    return {
        "statusCode": 200,
        "body": {"services": list_namespaces(catalog)},
    }


def handle_actions(event: dict[str, Any]) -> dict[str, Any]:
    namespace = (event.get("pathParameters") or {}).get("namespace", "")
    prefix = (event.get("queryStringParameters") or {}).get("prefix")

    catalog, index = catalog_source.load_index()
    try:
        actions = PrefixQuery.for_catalog(catalog, index).list_namespace_actions(namespace, prefix)
    except ServiceNotFound as exc:
        return {"statusCode": 404, "body": {"message": str(exc), "namespace": exc.namespace}}

    return {
        "statusCode": 200,
        "body": {"namespace": namespace, "prefix": prefix, "actions": actions},
    }
