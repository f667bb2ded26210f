# lingosearch/query/__init__.py
from .dsl import to_dsl
from .fragments import (
    Bool,
    Match,
    MatchAll,
    Mode,
    MultiMatch,
    Nested,
    QueryFragment,
    Term,
    bool_,
    match,
    multi_match,
    nested,
    prefixed,
    term,
)
from .values import DateTime, Integer, IntegerList, SearchValue, Text, classify, is_blank

__all__ = [
    "QueryFragment",
    "Mode",
    "MatchAll",
    "MultiMatch",
    "Nested",
    "Match",
    "Term",
    "Bool",
    "multi_match",
    "nested",
    "match",
    "term",
    "bool_",
    "prefixed",
    "to_dsl",
    "SearchValue",
    "Text",
    "Integer",
    "IntegerList",
    "DateTime",
    "classify",
    "is_blank",
]
