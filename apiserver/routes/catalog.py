"""Catalog access shared by the API routes."""

from __future__ import annotations

from cli.config import Settings
from core.index import PrefixIndex, build_index
from core.models import ServiceCatalog

# Warm Lambda containers reuse the immutable catalog and index between requests.
_LOADED: tuple[ServiceCatalog, PrefixIndex] | None = None


def load_catalog() -> ServiceCatalog:
    """Load the catalog using ``IAMEXPAND_*`` environment settings."""
    return Settings.from_env().catalog_repository().load()


def load_index() -> tuple[ServiceCatalog, PrefixIndex]:
    global _LOADED
    if _LOADED is None:
        catalog = load_catalog()
        _LOADED = (catalog, build_index(catalog.qualified_names()))
    return _LOADED


def reset() -> None:
    """Forget the loaded catalog so the next request reloads it."""
    global _LOADED
    _LOADED = None
