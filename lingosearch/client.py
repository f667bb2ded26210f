# lingosearch/client.py
"""Async Elasticsearch collaborator: fetches mappings and runs searches."""

import logging
import os
from typing import Any

import httpx

from lingosearch.schema import Index
from lingosearch.search import Search

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:9200"


class Elasticsearch:
    """Minimal HTTP client for one Elasticsearch cluster."""

    def __init__(
        self,
        url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = (url or self._load_from_env()).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _load_from_env(self) -> str:
        return os.getenv("ELASTICSEARCH_URL", DEFAULT_URL)

    @property
    def url(self) -> str:
        return self._url

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with client:'")
        return self._client

    async def get_index(self, name: str) -> Index:
        """Fetch the mapping of `name` and wrap it in an Index."""
        client = self._require_client()
        logger.debug("Requesting mapping: %s/%s/_mapping", self._url, name)
        response = await client.get(f"/{name}/_mapping")
        response.raise_for_status()
        data = response.json()
        # The response is keyed by the concrete index name, which may differ for aliases
        mappings = data.get(name) or next(iter(data.values()), {})
        return Index(name, mappings)

    async def execute(self, search: Search, size: int = 10) -> dict[str, Any]:
        """Run `search` and return the raw response body."""
        client = self._require_client()
        body = {**search.to_body(), "size": size}
        logger.debug("Requesting: %s/%s/_search", self._url, search.index.name)
        response = await client.post(f"/{search.index.name}/_search", json=body)
        response.raise_for_status()
        logger.debug("Response status: %s", response.status_code)
        return response.json()

    async def hits(self, search: Search, size: int = 10) -> list[dict[str, Any]]:
        """Run `search` and return the `_source` of each hit."""
        data = await self.execute(search, size)
        hits = data.get("hits", {}).get("hits", [])
        logger.debug("Results count: %s", len(hits))
        return [hit.get("_source", {}) for hit in hits]

    async def __aenter__(self) -> "Elasticsearch":
        self._client = httpx.AsyncClient(
            base_url=self._url, timeout=30.0, transport=self._transport
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
