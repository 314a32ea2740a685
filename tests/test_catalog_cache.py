"""Catalog cache, fetcher and repository tests."""

from __future__ import annotations

import httpx
import pytest
from botocore.exceptions import ClientError

from core.catalog.cache import FileCatalogCache, NullCatalogCache, S3CatalogCache
from core.catalog.fetcher import USER_AGENT, CatalogFetcher
from core.catalog.repository import CatalogRepository
from core.errors import CatalogFetchError, CatalogParseError

PAYLOAD = b'[{"service": "IAM", "servicePrefix": "iam", "actions": [{"action": "iam:CreateUser", "type": "Write"}]}]'


class DummyBody:
    def __init__(self, data: bytes) -> None:
        self.data = data

    def read(self) -> bytes:
        return self.data


class DummyS3:
    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}

    def _missing(self, operation: str) -> ClientError:
        return ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, operation)

    def get_object(self, Bucket, Key):  # noqa: N803
        if (Bucket, Key) not in self.objects:
            raise self._missing("GetObject")
        return {"Body": DummyBody(self.objects[(Bucket, Key)])}

    def head_object(self, Bucket, Key):  # noqa: N803
        if (Bucket, Key) not in self.objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        return {}

    def put_object(self, Bucket, Key, Body, ContentType=None):  # noqa: N803
        self.objects[(Bucket, Key)] = Body
        return {}

    def delete_object(self, Bucket, Key):  # noqa: N803
        self.objects.pop((Bucket, Key), None)
        return {}


class DummyFetcher:
    def __init__(self, payload: bytes = PAYLOAD) -> None:
        self.payload = payload
        self.calls = 0

    def fetch(self) -> bytes:
        self.calls += 1
        return self.payload


def test_file_cache_round_trip(tmp_path):
    cache = FileCatalogCache(tmp_path / "nested" / "catalog.json")
    assert cache.load() is None
    cache.store(PAYLOAD)
    assert cache.load() == PAYLOAD
    assert cache.invalidate() is True
    assert cache.load() is None
    assert cache.invalidate() is False


def test_file_cache_expands_user_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    cache = FileCatalogCache("~/catalog.json")
    assert cache.path == tmp_path / "catalog.json"


def test_s3_cache_round_trip():
    client = DummyS3()
    cache = S3CatalogCache(bucket="artifacts", key="catalog.json", client=client)
    assert cache.load() is None
    assert cache.invalidate() is False
    cache.store(PAYLOAD)
    assert client.objects[("artifacts", "catalog.json")] == PAYLOAD
    assert cache.load() == PAYLOAD
    assert cache.invalidate() is True
    assert client.objects == {}


def test_s3_cache_propagates_unexpected_errors():
    class DeniedS3(DummyS3):
        def get_object(self, Bucket, Key):  # noqa: N803
            raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject")

    cache = S3CatalogCache(bucket="artifacts", client=DeniedS3())
    with pytest.raises(ClientError):
        cache.load()


def test_s3_cache_requires_bucket():
    with pytest.raises(ValueError):
        S3CatalogCache(bucket="", client=DummyS3())


def test_repository_fetches_on_miss_and_stores(tmp_path):
    fetcher = DummyFetcher()
    repository = CatalogRepository(cache=FileCatalogCache(tmp_path / "catalog.json"), fetcher=fetcher)
    assert repository.retrieve() == PAYLOAD
    assert repository.retrieve() == PAYLOAD
    assert fetcher.calls == 1
    assert repository.load().namespaces() == ["iam"]


def test_repository_update_forces_refetch(tmp_path):
    fetcher = DummyFetcher()
    cache = FileCatalogCache(tmp_path / "catalog.json")
    cache.store(b"[]")
    repository = CatalogRepository(cache=cache, fetcher=fetcher)
    assert repository.update() == PAYLOAD
    assert fetcher.calls == 1
    assert cache.load() == PAYLOAD
    assert repository.clear() is True


def test_repository_without_cache_always_fetches():
    fetcher = DummyFetcher()
    repository = CatalogRepository(cache=NullCatalogCache(), fetcher=fetcher)
    repository.retrieve()
    repository.retrieve()
    assert fetcher.calls == 2
    assert repository.clear() is False


def test_fetcher_sends_user_agent():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=PAYLOAD)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    fetcher = CatalogFetcher(url="https://catalog.example/json", client=client)
    assert fetcher.fetch() == PAYLOAD
    assert seen[0].headers["User-Agent"] == USER_AGENT
    assert str(seen[0].url) == "https://catalog.example/json"


def test_fetcher_wraps_http_errors():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    fetcher = CatalogFetcher(url="https://catalog.example/json", client=client)
    with pytest.raises(CatalogFetchError):
        fetcher.fetch()


def test_repository_does_not_cache_unparseable_download(tmp_path):
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>captcha</html>")))
    cache = FileCatalogCache(tmp_path / "catalog.json")
    repository = CatalogRepository(cache=cache, fetcher=CatalogFetcher(url="https://catalog.example/json", client=client))

    with pytest.raises(CatalogParseError):
        repository.load()
    with pytest.raises(CatalogParseError):
        repository.update()
    assert cache.load() is None
