"""Error taxonomy for catalog indexing and policy expansion."""

from __future__ import annotations


class ExpansionError(Exception):
    """Base class for every error raised or recorded by the toolkit."""


class ServiceNotFound(ExpansionError):
    """Raised when a namespace is not part of the loaded catalog."""

    def __init__(self, namespace: str) -> None:
        super().__init__(f"Service '{namespace}' not found.")
        self.namespace = namespace


class MalformedActionValue(ExpansionError):
    """Recorded when an Action/NotAction value is neither a string nor a list of strings."""

    def __init__(self, statement_index: int, field: str = "Action") -> None:
        super().__init__(
            f"Statement {statement_index}: unsupported {field} format, expected a string or a list of strings"
        )
        self.statement_index = statement_index
        self.field = field

    def as_dict(self) -> dict[str, object]:
        return {"statementIndex": self.statement_index, "field": self.field, "message": str(self)}


class CatalogParseError(ExpansionError):
    """Raised when raw catalog data cannot be decoded into service records."""


class PolicyParseError(ExpansionError):
    """Raised when a policy document cannot be decoded."""


class CatalogFetchError(ExpansionError):
    """Raised when the catalog cannot be retrieved over HTTP."""


__all__ = [
    "ExpansionError",
    "ServiceNotFound",
    "MalformedActionValue",
    "CatalogParseError",
    "PolicyParseError",
    "CatalogFetchError",
]
