"""Configuration loader for the iamexpand CLI and API server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from core.catalog.cache import (
    DEFAULT_CACHE_KEY,
    DEFAULT_CACHE_PATH,
    CatalogCache,
    FileCatalogCache,
    NullCatalogCache,
    S3CatalogCache,
)
from core.catalog.fetcher import DEFAULT_CATALOG_URL, CatalogFetcher
from core.catalog.repository import CatalogRepository

CACHE_BACKENDS = {"file", "s3", "none"}
ENV_PREFIX = "IAMEXPAND_"

DEFAULTS = {
    "catalog_url": DEFAULT_CATALOG_URL,
    "cache_backend": "file",
    "cache_path": str(DEFAULT_CACHE_PATH),
    "cache_bucket": None,
    "cache_key": DEFAULT_CACHE_KEY,
    "request_timeout": 30.0,
    "default_format": "json",
    "log_level": "WARNING",
}


@dataclass(slots=True)
class Settings:
    catalog_url: str = DEFAULTS["catalog_url"]
    cache_backend: str = DEFAULTS["cache_backend"]
    cache_path: str = DEFAULTS["cache_path"]
    cache_bucket: str | None = DEFAULTS["cache_bucket"]
    cache_key: str = DEFAULTS["cache_key"]
    request_timeout: float = DEFAULTS["request_timeout"]
    default_format: str = DEFAULTS["default_format"]
    log_level: str = DEFAULTS["log_level"]

    def __post_init__(self) -> None:
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(f"cache_backend must be one of {', '.join(sorted(CACHE_BACKENDS))}")
        if self.cache_backend == "s3" and not self.cache_bucket:
            raise ValueError("cache_bucket is required when cache_backend is 's3'")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        return cls(
            catalog_url=data.get("catalog_url", DEFAULTS["catalog_url"]),
            cache_backend=str(data.get("cache_backend", DEFAULTS["cache_backend"])).lower(),
            cache_path=str(data.get("cache_path", DEFAULTS["cache_path"])),
            cache_bucket=data.get("cache_bucket", DEFAULTS["cache_bucket"]),
            cache_key=data.get("cache_key", DEFAULTS["cache_key"]),
            request_timeout=float(data.get("request_timeout", DEFAULTS["request_timeout"])),
            default_format=data.get("default_format", DEFAULTS["default_format"]),
            log_level=str(data.get("log_level", DEFAULTS["log_level"])).upper(),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read ``IAMEXPAND_*`` variables; a bucket switches the cache to S3."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for key in DEFAULTS:
            value = env.get(f"{ENV_PREFIX}{key.upper()}")
            if value:
                data[key] = value
        if data.get("cache_bucket") and "cache_backend" not in data:
            data["cache_backend"] = "s3"
        data.setdefault("cache_backend", "none")
        return cls.from_mapping(data)

    def merge_cli(self, format_override: str | None = None, log_level: str | None = None) -> "Settings":
        return Settings(
            catalog_url=self.catalog_url,
            cache_backend=self.cache_backend,
            cache_path=self.cache_path,
            cache_bucket=self.cache_bucket,
            cache_key=self.cache_key,
            request_timeout=self.request_timeout,
            default_format=format_override or self.default_format,
            log_level=log_level or self.log_level,
        )

    def catalog_cache(self) -> CatalogCache:
        if self.cache_backend == "s3":
            return S3CatalogCache(bucket=self.cache_bucket or "", key=self.cache_key)
        if self.cache_backend == "file":
            return FileCatalogCache(Path(self.cache_path))
        return NullCatalogCache()

    def catalog_repository(self) -> CatalogRepository:
        fetcher = CatalogFetcher(url=self.catalog_url, timeout=self.request_timeout)
        return CatalogRepository(cache=self.catalog_cache(), fetcher=fetcher)


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Configuration file must be a mapping of keys to values.")

    return Settings.from_mapping(data)


__all__ = ["Settings", "load_settings"]
