# lingosearch/query/dsl.py
"""Serialize QueryFragment trees into the Elasticsearch query DSL."""

from typing import Any

from lingosearch.query.fragments import (
    Bool,
    Match,
    MatchAll,
    Mode,
    MultiMatch,
    Nested,
    QueryFragment,
    Term,
)


def to_dsl(fragment: QueryFragment) -> dict[str, Any]:
    """Convert a fragment into its JSON-ready query DSL dict."""
    match fragment:
        case MatchAll():
            return {"match_all": {}}
        case MultiMatch(fields=fields, query=q):
            return {"multi_match": {"fields": list(fields), "query": q}}
        case Nested(path=p, query=q):
            return {"nested": {"path": p, "query": to_dsl(q)}}
        case Match(field=f, value=v):
            return {"match": {f: v}}
        case Term(field=f, value=v, negated=False):
            return {"term": {f: v}}
        case Term(field=f, value=v, negated=True):
            return {"bool": {"must_not": [{"term": {f: v}}]}}
        case Bool(mode=Mode.SHOULD | Mode.MUST as m, children=c):
            return {"bool": {m.value: [to_dsl(child) for child in c]}}
        case Bool(mode=Mode.OR, children=c):
            return {"bool": {"should": [to_dsl(child) for child in c], "minimum_should_match": 1}}
        case Bool(mode=Mode.AND, children=c):
            return {"bool": {"filter": [to_dsl(child) for child in c]}}
        case _:
            raise ValueError(f"Unsupported query node: {fragment}")


def combine(fragments: list[dict[str, Any]], mode: Mode) -> dict[str, Any]:
    """Join already-serialized clauses; a single clause is returned as-is."""
    if len(fragments) == 1:
        return fragments[0]
    if mode is Mode.OR:
        return {"bool": {"should": fragments, "minimum_should_match": 1}}
    if mode is Mode.AND:
        return {"bool": {"filter": fragments}}
    return {"bool": {mode.value: fragments}}
