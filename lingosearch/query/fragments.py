# lingosearch/query/fragments.py
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Mode(StrEnum):
    """Combinator joining sibling fragments."""

    SHOULD = "should"
    MUST = "must"
    OR = "or"
    AND = "and"


@dataclass(frozen=True)
class QueryFragment:
    """Base AST node for search-engine queries."""

    def __and__(self, other: "QueryFragment") -> "Bool":
        return Bool(Mode.MUST, (self, other))

    def __or__(self, other: "QueryFragment") -> "Bool":
        return Bool(Mode.SHOULD, (self, other))


@dataclass(frozen=True)
class MatchAll(QueryFragment):
    """Identity fragment: restricts nothing."""


@dataclass(frozen=True)
class MultiMatch(QueryFragment):
    """Full-text match of one query across several fields."""

    fields: tuple[str, ...]
    query: str


@dataclass(frozen=True)
class Nested(QueryFragment):
    """Query scoped to single elements of a nested collection."""

    path: str
    query: QueryFragment


@dataclass(frozen=True)
class Match(QueryFragment):
    """Match: field=value."""

    field: str
    value: Any


@dataclass(frozen=True)
class Term(QueryFragment):
    """Exact term, optionally negated."""

    field: str
    value: Any
    negated: bool = False

    def __invert__(self) -> "Term":
        return Term(self.field, self.value, not self.negated)


@dataclass(frozen=True)
class Bool(QueryFragment):
    """Children joined under one combinator."""

    mode: Mode
    children: tuple[QueryFragment, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))
        object.__setattr__(self, "children", tuple(self.children))


# Factory functions (public API)
def multi_match(fields: list[str] | tuple[str, ...], query: str) -> MultiMatch:
    return MultiMatch(tuple(fields), query)


def nested(path: str, query: QueryFragment) -> Nested:
    return Nested(path, query)


def match(field: str, value: Any) -> Match:
    return Match(field, value)


def term(field: str, value: Any, negated: bool = False) -> Term:
    return Term(field, value, negated)


def bool_(mode: Mode | str, children: list[QueryFragment] | tuple[QueryFragment, ...]) -> Bool:
    return Bool(Mode(mode), tuple(children))


def prefixed(path: str, fields: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Qualify field names with a nested path: `path.field`."""
    return tuple(f"{path}.{f}" for f in fields)
