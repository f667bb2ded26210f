# lingosearch/__init__.py
"""lingosearch - Multilingual query construction for Elasticsearch."""

from lingosearch.builder import QueryBuilder
from lingosearch.client import Elasticsearch
from lingosearch.errors import (
    CapabilityNotFound,
    LingoSearchError,
    LocaleFieldMismatch,
    SchemaUnavailable,
    UnsupportedValueShape,
)
from lingosearch.policy import Policy, restriction
from lingosearch.query import (
    Bool,
    Match,
    MatchAll,
    Mode,
    MultiMatch,
    Nested,
    QueryFragment,
    Term,
    to_dsl,
)
from lingosearch.schema import Index, TranslatedFieldRegistry, default_registry
from lingosearch.search import Search

__all__ = [
    # Query fragments
    "QueryFragment",
    "Mode",
    "MatchAll",
    "MultiMatch",
    "Nested",
    "Match",
    "Term",
    "Bool",
    "to_dsl",
    # Schema
    "Index",
    "TranslatedFieldRegistry",
    "default_registry",
    # Building
    "QueryBuilder",
    "Search",
    "Policy",
    "restriction",
    "Elasticsearch",
    # Errors
    "LingoSearchError",
    "SchemaUnavailable",
    "UnsupportedValueShape",
    "CapabilityNotFound",
    "LocaleFieldMismatch",
]
