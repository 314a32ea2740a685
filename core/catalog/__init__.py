"""Catalog retrieval and caching."""

from .cache import CatalogCache, FileCatalogCache, NullCatalogCache, S3CatalogCache
from .fetcher import CatalogFetcher
from .repository import CatalogRepository

__all__ = [
    "CatalogCache",
    "CatalogFetcher",
    "CatalogRepository",
    "FileCatalogCache",
    "NullCatalogCache",
    "S3CatalogCache",
]
