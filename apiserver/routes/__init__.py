"""API routes."""

from . import catalog, expand, services

__all__ = ["catalog", "expand", "services"]
