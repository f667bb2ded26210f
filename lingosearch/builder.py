# lingosearch/builder.py
"""Translate search criteria into nested boolean query fragments."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from lingosearch.errors import LocaleFieldMismatch
from lingosearch.query.fragments import (
    Bool,
    Match,
    MatchAll,
    Mode,
    MultiMatch,
    Nested,
    QueryFragment,
    Term,
    prefixed,
)
from lingosearch.query.values import DateTime, Integer, IntegerList, Text, classify, is_blank
from lingosearch.schema import TRANSLATIONS, Index, TranslatedFieldRegistry, default_registry

logger = logging.getLogger(__name__)

ACTIVE_LOCALES = "active_locales"


class QueryBuilder:
    """Build query fragments for one index.

    Fields listed under the index's nested `translations` mapping are searched
    through a nested query on `translations.<field>`; all other fields are
    matched directly.
    """

    def __init__(
        self,
        index: Index,
        registry: TranslatedFieldRegistry | None = None,
        path: str = TRANSLATIONS,
    ) -> None:
        self.index = index
        self.registry = registry or default_registry
        self.path = path

    @property
    def translated_fields(self) -> frozenset[str]:
        return self.registry.translated_fields(self.index)

    def search_by_fields(
        self,
        fields: Iterable[str],
        query: str,
        mode: Mode | str = Mode.SHOULD,
    ) -> QueryFragment:
        """Search `query` in every field; fields are alternatives under `mode`.

        Usage:
            builder.search_by_fields(["name", "character_description"], "Falbala")
        """
        translated = self.translated_fields
        fields = [str(f) for f in fields]
        plain = [f for f in fields if f not in translated]
        nested_fields = [f for f in fields if f in translated]

        result: list[QueryFragment] = []
        if plain:
            result.append(MultiMatch(tuple(plain), query))
        if nested_fields:
            result.append(self.nested_search_by_fields(self.path, nested_fields, query))
        if not result:
            return MatchAll()
        return Bool(mode, tuple(result))

    def nested_search_by_fields(
        self, path: str, fields: Iterable[str], query: str
    ) -> Nested:
        """Multi-match on `path.<field>` scoped to single nested elements.

        The fields must be mapped under a nested `path`, otherwise the store
        rejects the query.
        """
        return Nested(path, MultiMatch(prefixed(path, tuple(fields)), query))

    def search_by(self, criteria: Mapping[str, Any] | None = None, **kwargs: Any) -> QueryFragment:
        """Every non-blank criterion must match.

        Usage:
            builder.search_by({"name": "Assurancetourix", "harp_id": 1, "hut_id": [1, 2, 3]})
                => name contains Assurancetourix AND harp_id is 1 AND hut_id is 1, 2 or 3
        """
        criteria = {**(criteria or {}), **kwargs}
        children: list[QueryFragment] = []
        for field, value in criteria.items():
            if is_blank(value):
                continue
            fragment = self.unit_search_by(field, value)
            if fragment is not None:
                children.append(fragment)
        if not children:
            return MatchAll()
        return Bool(Mode.MUST, tuple(children))

    def unit_search_by(self, field: str, value: Any) -> QueryFragment | None:
        """Fragment for a single criterion, or None when it restricts nothing."""
        match classify(field, value):
            case Text(value=text):
                return self.search_by_fields([field], text, mode=Mode.MUST)
            case Integer(value=n):
                return Match(field, n)
            case IntegerList(values=()):
                return None
            case IntegerList(values=values):
                return Bool(Mode.SHOULD, tuple(Match(field, v) for v in values))
            case DateTime(value=d):
                # TODO: range queries on date fields
                logger.warning("Ignoring date criterion %s=%s: dates are not searchable", field, d)
                return None

    def autocomplete(
        self,
        fields: Iterable[str],
        query: str,
        locale: str | None = None,
    ) -> QueryFragment:
        """Autocomplete `query` on `fields`, optionally within one locale.

        Without a locale, this is `search_by_fields`. With a locale, every
        field must be translated.

        Raises:
            LocaleFieldMismatch: if a locale is given for plain fields.
        """
        fields = [str(f) for f in fields]
        if not locale:
            return self.search_by_fields(fields, query)
        if not fields:
            return MatchAll()

        plain = tuple(f for f in fields if f not in self.translated_fields)
        if plain:
            raise LocaleFieldMismatch(plain, locale)

        return Nested(
            self.path,
            Bool(
                Mode.MUST,
                (
                    MultiMatch(prefixed(self.path, fields), query),
                    Match(f"{self.path}.locale", locale),
                ),
            ),
        )

    def active_filter(self, locales: Iterable[str]) -> Bool:
        """Records active in at least one of `locales`."""
        return self.activation_status_filter(locales, active=True)

    def inactive_filter(self, locales: Iterable[str]) -> Bool:
        """Records active in none of `locales`."""
        return self.activation_status_filter(locales, active=False)

    def activation_status_filter(self, locales: Iterable[str], active: bool) -> Bool:
        mode = Mode.OR if active else Mode.AND
        terms = tuple(Term(ACTIVE_LOCALES, locale, negated=not active) for locale in locales)
        return Bool(mode, terms)
