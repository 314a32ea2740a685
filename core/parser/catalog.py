"""Decode the raw IAM action catalog into service records."""

from __future__ import annotations

import gzip
import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from core.errors import CatalogParseError
from core.models import ServiceCatalog, ServiceModel

_GZIP_MAGIC = b"\x1f\x8b"
_SERVICES = TypeAdapter(list[ServiceModel])


def _decode(raw: bytes | str) -> str:
    if isinstance(raw, str):
        return raw
    if raw.startswith(_GZIP_MAGIC):
        raw = gzip.decompress(raw)
    return raw.decode("utf-8")


def parse_catalog(raw: bytes | str) -> ServiceCatalog:
    """Parse catalog JSON (optionally gzip-compressed) into a ServiceCatalog.

    Any decode or schema failure aborts the whole catalog.
    """
    try:
        payload: Any = json.loads(_decode(raw))
    except (UnicodeDecodeError, OSError, json.JSONDecodeError) as exc:
        raise CatalogParseError(f"Catalog is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise CatalogParseError("Catalog must be a JSON array of service records")

    try:
        records = _SERVICES.validate_python(payload)
    except ValidationError as exc:
        raise CatalogParseError(f"Catalog does not match the service schema: {exc}") from exc
    return ServiceCatalog.from_services(records)


__all__ = ["parse_catalog"]
