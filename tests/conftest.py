from __future__ import annotations

import pytest

from lingosearch.builder import QueryBuilder
from lingosearch.schema import Index, TranslatedFieldRegistry, default_registry

VILLAGER_MAPPING = {
    "villager": {
        "properties": {
            "some_id": {"type": "integer"},
            "another_id": {"type": "integer"},
            "nickname": {"type": "text"},
            "active_locales": {"type": "keyword"},
            "translations": {
                "type": "nested",
                "properties": {
                    "locale": {"type": "keyword"},
                    "name": {"type": "text"},
                    "description": {"type": "text"},
                },
            },
        }
    }
}

PLAIN_MAPPING = {
    "properties": {
        "title": {"type": "text"},
        "year": {"type": "integer"},
    }
}


@pytest.fixture(autouse=True)
def _fresh_default_registry():
    default_registry.invalidate()
    yield
    default_registry.invalidate()


@pytest.fixture
def registry() -> TranslatedFieldRegistry:
    return TranslatedFieldRegistry()


@pytest.fixture
def villagers() -> Index:
    return Index("villagers", VILLAGER_MAPPING)


@pytest.fixture
def builder(villagers: Index, registry: TranslatedFieldRegistry) -> QueryBuilder:
    return QueryBuilder(villagers, registry)
