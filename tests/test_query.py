"""Namespace query tests."""

from __future__ import annotations

import pytest

from core.errors import ServiceNotFound
from core.index import build_index
from core.models import ActionModel, ServiceCatalog, ServiceModel
from core.query import PrefixQuery, list_namespaces, query_namespace, strip_wildcards


def _service(namespace: str, *names: str, display: str | None = None) -> ServiceModel:
    return ServiceModel(
        display_name=display or namespace.upper(),
        namespace=namespace,
        actions=[ActionModel(qualified_name=f"{namespace}:{name}", category="Write") for name in names],
    )


def _catalog() -> ServiceCatalog:
    return ServiceCatalog.from_services(
        [
            _service("iam", "CreateUser", "CreateRole", "DeleteUser"),
            _service("s3", "GetObject", "GetBucket", "PutObject"),
            _service("s3", "GetObject", "ListBucket", display="S3 Express"),
            _service("empty"),
        ]
    )


def _query() -> PrefixQuery:
    catalog = _catalog()
    return PrefixQuery.for_catalog(catalog, build_index(catalog.qualified_names()))


def test_resolve_without_prefix():
    assert _query().resolve("iam") == "iam:"


def test_resolve_strips_wildcards():
    query = _query()
    assert query.resolve("iam", "Create*") == "iam:Create"
    assert query.resolve("s3", "Get*Object") == "s3:GetObject"
    assert query.resolve("s3", "***") == "s3:"


def test_resolve_unknown_namespace_raises():
    with pytest.raises(ServiceNotFound) as excinfo:
        _query().resolve("doesnotexist")
    assert excinfo.value.namespace == "doesnotexist"


def test_list_namespace_actions_by_prefix():
    assert set(_query().list_namespace_actions("iam", "Create")) == {"iam:CreateUser", "iam:CreateRole"}


def test_list_namespace_actions_merges_shared_namespace_without_duplicates():
    actions = _query().list_namespace_actions("s3")
    assert sorted(actions) == ["s3:GetBucket", "s3:GetObject", "s3:ListBucket", "s3:PutObject"]
    assert len(actions) == len(set(actions))


def test_middle_wildcard_degenerates_to_literal_prefix():
    # "Get*Object" is not a glob: it only matches names starting with GetObject.
    assert _query().list_namespace_actions("s3", "Get*Object") == ["s3:GetObject"]


def test_known_namespace_without_actions_returns_empty():
    assert _query().list_namespace_actions("empty") == []


def test_failed_query_leaves_index_usable():
    query = _query()
    with pytest.raises(ServiceNotFound):
        query.list_namespace_actions("doesnotexist")
    assert set(query.list_namespace_actions("iam")) == {"iam:CreateUser", "iam:CreateRole", "iam:DeleteUser"}


def test_query_namespace_defaults_to_index_namespaces():
    index = build_index(_catalog().qualified_names())
    assert query_namespace(index, "iam", "Delete") == ["iam:DeleteUser"]
    with pytest.raises(ServiceNotFound):
        query_namespace(index, "empty")
    assert query_namespace(index, "empty", namespaces=["empty"]) == []


def test_list_namespaces_is_sorted():
    assert list_namespaces(_catalog()) == ["empty", "iam", "s3"]


def test_strip_wildcards():
    assert strip_wildcards("*Get*Object*") == "GetObject"
