from __future__ import annotations

import json

import httpx
import pytest

from lingosearch.client import DEFAULT_URL, Elasticsearch
from lingosearch.schema import Index
from lingosearch.search import Search
from tests.conftest import VILLAGER_MAPPING

HITS = {
    "hits": {
        "total": {"value": 2},
        "hits": [
            {"_id": "1", "_source": {"nickname": "Getafix"}},
            {"_id": "2", "_source": {"nickname": "Cacofonix"}},
        ],
    }
}


def make_transport(requests: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/villagers/_mapping":
            return httpx.Response(200, json={"villagers": {"mappings": VILLAGER_MAPPING}})
        if request.url.path == "/villagers/_search":
            return httpx.Response(200, json=HITS)
        return httpx.Response(404, json={"error": "index_not_found_exception"})

    return httpx.MockTransport(handler)


def test_url_from_env(monkeypatch):
    monkeypatch.setenv("ELASTICSEARCH_URL", "http://search.local:9200/")
    assert Elasticsearch().url == "http://search.local:9200"


def test_default_url(monkeypatch):
    monkeypatch.delenv("ELASTICSEARCH_URL", raising=False)
    assert Elasticsearch().url == DEFAULT_URL


def test_explicit_url_wins(monkeypatch):
    monkeypatch.setenv("ELASTICSEARCH_URL", "http://search.local:9200")
    assert Elasticsearch("http://other:9200").url == "http://other:9200"


class TestElasticsearch:
    @pytest.mark.asyncio
    async def test_requires_context(self):
        client = Elasticsearch("http://es:9200")
        with pytest.raises(RuntimeError):
            await client.get_index("villagers")

    @pytest.mark.asyncio
    async def test_get_index_reads_mapping(self):
        requests: list[httpx.Request] = []
        async with Elasticsearch("http://es:9200", transport=make_transport(requests)) as client:
            index = await client.get_index("villagers")

        assert index.name == "villagers"
        assert Search(index).builder.translated_fields == {"locale", "name", "description"}
        assert requests[0].method == "GET"

    @pytest.mark.asyncio
    async def test_execute_posts_body(self):
        requests: list[httpx.Request] = []
        async with Elasticsearch("http://es:9200", transport=make_transport(requests)) as client:
            index = await client.get_index("villagers")
            search = Search(index).search_by(name="Getafix").active_filter(["fr"])
            hits = await client.hits(search, size=5)

        assert hits == [{"nickname": "Getafix"}, {"nickname": "Cacofonix"}]
        sent = json.loads(requests[-1].content)
        assert requests[-1].method == "POST"
        assert sent["size"] == 5
        assert sent["query"] == search.to_body()["query"]

    @pytest.mark.asyncio
    async def test_http_errors_propagate(self):
        async with Elasticsearch("http://es:9200", transport=make_transport([])) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get_index("missing")

    @pytest.mark.asyncio
    async def test_client_closed_on_exit(self):
        client = Elasticsearch("http://es:9200", transport=make_transport([]))
        async with client:
            pass
        with pytest.raises(RuntimeError):
            await client.hits(Search(Index("villagers")))
