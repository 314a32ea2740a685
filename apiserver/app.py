"""Entrypoint compatible with AWS Lambda + API Gateway."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict

from apiserver.routes import expand, services
from core.errors import CatalogFetchError, CatalogParseError

logger = logging.getLogger(__name__)

RouteHandler = Callable[[dict[str, Any]], dict[str, Any]]


ROUTES: Dict[str, RouteHandler] = {
    "GET /services": services.handle_list,
    "GET /services/{namespace}": services.handle_actions,
    "POST /expand": expand.handle,
}


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    method = event.get("httpMethod", "GET")
    path = event.get("resource") or event.get("path", "/")
    key = f"{method.upper()} {path}"
    handler = ROUTES.get(key)

    if not handler:
        return _json_response({"statusCode": 404, "body": {"message": "Route not found"}})

    try:
        response = handler(event)
    except (CatalogFetchError, CatalogParseError) as exc:
        logger.error("Catalog unavailable: %s", exc)
        response = {"statusCode": 502, "body": {"message": str(exc)}}
    return _json_response(response)


def _json_response(response: dict[str, Any]) -> dict[str, Any]:
    response.setdefault("headers", {"Content-Type": "application/json"})
    if "body" in response and not isinstance(response["body"], str):
        response["body"] = json.dumps(response["body"])
    return response
