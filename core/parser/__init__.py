"""Parsers for the catalog and policy inputs."""

from .catalog import parse_catalog
from .policy import load_policy, parse_policy

__all__ = ["parse_catalog", "parse_policy", "load_policy"]
