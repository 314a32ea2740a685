"""Core catalog index and policy expansion for the IAM action expander."""

from .errors import (
    CatalogFetchError,
    CatalogParseError,
    ExpansionError,
    MalformedActionValue,
    PolicyParseError,
    ServiceNotFound,
)
from .index import PrefixIndex, build_index
from .models import ActionModel, PolicyDocument, PolicyStatement, ServiceCatalog, ServiceModel
from .policy.expander import PolicyExpander, expand_policy
from .query import PrefixQuery, list_namespaces, query_namespace

__all__ = [
    "ActionModel",
    "ServiceModel",
    "ServiceCatalog",
    "PolicyDocument",
    "PolicyStatement",
    "PrefixIndex",
    "PrefixQuery",
    "PolicyExpander",
    "build_index",
    "list_namespaces",
    "query_namespace",
    "expand_policy",
    "ExpansionError",
    "ServiceNotFound",
    "MalformedActionValue",
    "CatalogParseError",
    "PolicyParseError",
    "CatalogFetchError",
]
