"""Combine a catalog cache with the HTTP fetcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from core.catalog.cache import CatalogCache, NullCatalogCache
from core.catalog.fetcher import CatalogFetcher
from core.models import ServiceCatalog
from core.parser.catalog import parse_catalog

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogRepository:
    """Serve the catalog from cache, falling back to the network on a miss.

    Downloaded payloads are parsed before they are cached, so a response that
    is not a catalog never reaches the cache.
    """

    cache: CatalogCache = field(default_factory=NullCatalogCache)
    fetcher: CatalogFetcher = field(default_factory=CatalogFetcher)

    def retrieve(self) -> bytes:
        cached = self.cache.load()
        if cached is not None:
            return cached
        payload, _ = self._download()
        return payload

    def load(self) -> ServiceCatalog:
        cached = self.cache.load()
        if cached is not None:
            return parse_catalog(cached)
        _, catalog = self._download()
        return catalog

    def clear(self) -> bool:
        return self.cache.invalidate()

    def update(self) -> bytes:
        """Force a fresh download and replace the cached copy."""
        self.cache.invalidate()
        return self.retrieve()

    def _download(self) -> tuple[bytes, ServiceCatalog]:
        logger.debug("Catalog cache miss")
        payload = self.fetcher.fetch()
        catalog = parse_catalog(payload)
        self.cache.store(payload)
        return payload, catalog


__all__ = ["CatalogRepository"]
