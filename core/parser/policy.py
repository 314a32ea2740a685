"""Decode IAM policy documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.errors import PolicyParseError
from core.models import PolicyDocument


def parse_policy(raw: str | bytes | dict[str, Any]) -> PolicyDocument:
    """Build a PolicyDocument from JSON text or an already decoded mapping."""
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PolicyParseError(f"Policy is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise PolicyParseError("Policy document must be a JSON object")

    try:
        return PolicyDocument.model_validate(raw)
    except ValidationError as exc:
        raise PolicyParseError(f"Policy document is malformed: {exc}") from exc


def load_policy(path: Path) -> PolicyDocument:
    return parse_policy(path.read_text(encoding="utf-8"))


__all__ = ["parse_policy", "load_policy"]
