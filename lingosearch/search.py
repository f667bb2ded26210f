# lingosearch/search.py
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from lingosearch.builder import QueryBuilder
from lingosearch.query.dsl import combine, to_dsl
from lingosearch.query.fragments import MatchAll, Mode, QueryFragment
from lingosearch.schema import Index, TranslatedFieldRegistry

if TYPE_CHECKING:
    from lingosearch.policy import Policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Search:
    """Immutable, chainable search request against one index.

    Every method returns a new Search; the original is left untouched.

    Examples:
        users = Search(Index("users", mapping))
        users.search_by(name="Getafix", village_id=[1, 2]).active_filter(["fr", "en"])
    """

    index: Index
    builder: QueryBuilder = field(default=None, compare=False, repr=False)  # type: ignore[assignment]
    queries: tuple[QueryFragment, ...] = ()
    filters: tuple[QueryFragment, ...] = ()
    query_mode: Mode = Mode.MUST
    filter_mode: Mode = Mode.AND

    def __post_init__(self) -> None:
        if self.builder is None:
            object.__setattr__(self, "builder", QueryBuilder(self.index))

    @classmethod
    def for_index(cls, index: Index, registry: TranslatedFieldRegistry | None = None) -> "Search":
        return cls(index, QueryBuilder(index, registry))

    def query(self, fragment: QueryFragment) -> "Search":
        if isinstance(fragment, MatchAll):
            return self
        return replace(self, queries=(*self.queries, fragment))

    def filter(self, fragment: QueryFragment) -> "Search":
        if isinstance(fragment, MatchAll):
            return self
        return replace(self, filters=(*self.filters, fragment))

    def with_query_mode(self, mode: Mode | str) -> "Search":
        return replace(self, query_mode=Mode(mode))

    def with_filter_mode(self, mode: Mode | str) -> "Search":
        return replace(self, filter_mode=Mode(mode))

    def search_by(self, criteria: Mapping[str, Any] | None = None, **kwargs: Any) -> "Search":
        return self.query(self.builder.search_by(criteria, **kwargs))

    def search_by_fields(
        self, fields: Iterable[str], query: str, mode: Mode | str = Mode.SHOULD
    ) -> "Search":
        return self.query(self.builder.search_by_fields(fields, query, mode))

    def autocomplete(
        self, fields: Iterable[str], query: str, locale: str | None = None
    ) -> "Search":
        return self.query(self.builder.autocomplete(fields, query, locale))

    def active_filter(self, locales: Iterable[str]) -> "Search":
        return self.filter(self.builder.active_filter(locales))

    def inactive_filter(self, locales: Iterable[str]) -> "Search":
        return self.filter(self.builder.inactive_filter(locales))

    def permitted(self, policy: "Policy", action: str) -> Any:
        """Let `policy` restrict this search for `action`.

        The policy's return value is passed through unchanged.
        """
        return policy.restrict(action, self)

    def to_body(self) -> dict[str, Any]:
        """Compose the Elasticsearch request body."""
        queries = [to_dsl(q) for q in self.queries]
        filters = [to_dsl(f) for f in self.filters]

        if not filters:
            query = combine(queries, self.query_mode) if queries else {"match_all": {}}
            body = {"query": query}
        else:
            clauses: dict[str, Any] = {"filter": [combine(filters, self.filter_mode)]}
            if queries:
                clauses = {"must": [combine(queries, self.query_mode)], **clauses}
            body = {"query": {"bool": clauses}}

        logger.debug("Search body for %s: %s", self.index.name, body)
        return body
