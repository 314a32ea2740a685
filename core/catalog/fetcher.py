"""Download the IAM action catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from core.errors import CatalogFetchError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://www.awsiamactions.io/json"
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:146.0) Gecko/20100101 Firefox/146.0"


@dataclass(slots=True)
class CatalogFetcher:
    """Fetch the raw catalog payload over HTTP."""

    url: str = DEFAULT_CATALOG_URL
    timeout: float = 30.0
    client: httpx.Client | None = None

    def fetch(self) -> bytes:
        logger.info("Fetching IAM action catalog from %s", self.url)
        client = self.client or httpx.Client(timeout=self.timeout, follow_redirects=True)
        try:
            response = client.get(self.url, headers={"User-Agent": USER_AGENT})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise CatalogFetchError(f"Could not fetch catalog from {self.url}: {exc}") from exc
        finally:
            if self.client is None:
                client.close()
        return response.content


__all__ = ["CatalogFetcher", "DEFAULT_CATALOG_URL", "USER_AGENT"]
