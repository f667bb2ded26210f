# lingosearch/schema.py
"""Index descriptors and translated-field classification."""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from lingosearch.errors import SchemaUnavailable

logger = logging.getLogger(__name__)

TRANSLATIONS = "translations"


@dataclass(frozen=True)
class Index:
    """An index name plus its Elasticsearch mapping body."""

    name: str
    mappings: Mapping[str, Any] = field(default_factory=dict, hash=False, compare=False)


def _properties(mappings: Mapping[str, Any]) -> Mapping[str, Any]:
    """Locate the top-level `properties` block in any mapping layout.

    Accepts typeless mappings, legacy typed mappings (`{type: {properties}}`),
    a `{"mappings": ...}` wrapper and the raw `GET /<index>/_mapping` body.
    """
    current: Any = mappings
    # At most: index name -> "mappings" -> type name -> "properties"
    for _ in range(4):
        if not isinstance(current, Mapping) or not current:
            break
        if isinstance(current.get("properties"), Mapping):
            return current["properties"]
        if "mappings" in current:
            current = current["mappings"]
            continue
        current = next(iter(current.values()))
    raise SchemaUnavailable("Mapping has no properties")


def translated_field_names(mappings: Mapping[str, Any]) -> frozenset[str]:
    """Return the inner field names of the nested `translations` property.

    Raises:
        SchemaUnavailable: if the mapping is empty, has no `translations`
            property or that property lacks inner `properties`.
    """
    translations = _properties(mappings).get(TRANSLATIONS)
    if not isinstance(translations, Mapping):
        raise SchemaUnavailable(f"Mapping has no {TRANSLATIONS!r} field")
    inner = translations.get("properties")
    if not isinstance(inner, Mapping):
        raise SchemaUnavailable(f"{TRANSLATIONS!r} field has no inner properties")
    return frozenset(str(name) for name in inner)


class TranslatedFieldRegistry:
    """Per-index cache of translated field names.

    Each index name is classified at most once; entries are never refreshed
    unless explicitly invalidated.
    """

    def __init__(self) -> None:
        self._fields: dict[str, frozenset[str]] = {}
        self._lock = threading.Lock()

    def translated_fields(self, index: Index) -> frozenset[str]:
        cached = self._fields.get(index.name)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._fields.get(index.name)
            if cached is None:
                cached = self._classify(index)
                self._fields[index.name] = cached
            return cached

    def _classify(self, index: Index) -> frozenset[str]:
        try:
            names = translated_field_names(index.mappings)
        except SchemaUnavailable as e:
            logger.debug("No translated fields for index %s: %s", index.name, e)
            return frozenset()
        logger.debug("Translated fields for index %s: %s", index.name, sorted(names))
        return names

    def invalidate(self, name: str | None = None) -> None:
        """Forget one index (or all of them)."""
        with self._lock:
            if name is None:
                self._fields.clear()
            else:
                self._fields.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._fields


default_registry = TranslatedFieldRegistry()
