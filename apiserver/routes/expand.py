"""API route for expanding wildcard actions in a policy document."""

from __future__ import annotations

import json
from typing import Any

from apiserver.routes import catalog as catalog_source
from core.errors import PolicyParseError
from core.parser.policy import parse_policy
from core.policy.expander import PolicyExpander


def _policy_payload(event: dict[str, Any]) -> Any:
    payload = event.get("body")
    if isinstance(payload, str):
        try:
            data = json.loads(payload or "{}")
        except json.JSONDecodeError as exc:
            raise PolicyParseError(f"Request body is not valid JSON: {exc}") from exc
    else:
        data = payload or {}
    if isinstance(data, dict) and isinstance(data.get("policy"), dict):
        return data["policy"]
    return data


def handle(event: dict[str, Any]) -> dict[str, Any]:
    try:
        document = parse_policy(_policy_payload(event))
    except PolicyParseError as exc:
        return {"statusCode": 400, "body": {"message": str(exc)}}

    _, index = catalog_source.load_index()
    result = PolicyExpander(index).expand(document)
    return {
        "statusCode": 200,
        "body": {
            "policy": result.document.to_json(),
            "errors": [error.as_dict() for error in result.errors],
        },
    }
