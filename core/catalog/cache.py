"""Swappable storage for the raw catalog payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_PATH = Path("~/.cache/iamexpand/aws_iam_actions.json")
DEFAULT_CACHE_KEY = "iamexpand/aws_iam_actions.json"
_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class CatalogCache(Protocol):
    def load(self) -> bytes | None:
        """Return the cached payload, or ``None`` on a miss."""

    def store(self, payload: bytes) -> None:
        ...

    def invalidate(self) -> bool:
        """Drop the cached payload; report whether anything was removed."""


class NullCatalogCache:
    """Cache that never holds anything."""

    def load(self) -> bytes | None:
        return None

    def store(self, payload: bytes) -> None:
        return None

    def invalidate(self) -> bool:
        return False


@dataclass(slots=True)
class FileCatalogCache:
    """Keep the catalog in a file on the local filesystem."""

    path: Path = DEFAULT_CACHE_PATH

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()

    def load(self) -> bytes | None:
        if not self.path.is_file():
            return None
        logger.info("Using cached catalog at %s", self.path)
        return self.path.read_bytes()

    def store(self, payload: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(payload)
        logger.info("Stored catalog cache at %s", self.path)

    def invalidate(self) -> bool:
        if not self.path.exists():
            logger.info("No catalog cache found at %s", self.path)
            return False
        self.path.unlink()
        logger.info("Deleted catalog cache at %s", self.path)
        return True


@dataclass(slots=True)
class S3CatalogCache:
    """Keep the catalog as a single S3 object."""

    bucket: str
    key: str = DEFAULT_CACHE_KEY
    client: Any | None = None

    def __post_init__(self) -> None:
        if not self.bucket:
            raise ValueError("S3 catalog cache requires a bucket name.")
        self.client = self.client or boto3.client("s3")

    def load(self) -> bytes | None:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=self.key)
        except ClientError as exc:
            if _error_code(exc) in _MISSING_CODES:
                return None
            raise
        logger.info("Using cached catalog at s3://%s/%s", self.bucket, self.key)
        return response["Body"].read()

    def store(self, payload: bytes) -> None:
        self.client.put_object(Bucket=self.bucket, Key=self.key, Body=payload, ContentType="application/json")
        logger.info("Stored catalog cache at s3://%s/%s", self.bucket, self.key)

    def invalidate(self) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=self.key)
        except ClientError as exc:
            if _error_code(exc) in _MISSING_CODES:
                return False
            raise
        self.client.delete_object(Bucket=self.bucket, Key=self.key)
        logger.info("Deleted catalog cache at s3://%s/%s", self.bucket, self.key)
        return True


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


__all__ = [
    "CatalogCache",
    "NullCatalogCache",
    "FileCatalogCache",
    "S3CatalogCache",
    "DEFAULT_CACHE_PATH",
    "DEFAULT_CACHE_KEY",
]
