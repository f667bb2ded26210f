import pytest

from lingosearch.query.dsl import combine, to_dsl
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


def test_autocomplete_shape():
    q = Nested(
        "translations",
        Bool(
            Mode.MUST,
            (MultiMatch(("translations.name",), "Idefix"), Match("translations.locale", "fr")),
        ),
    )
    assert to_dsl(q) == {
        "nested": {
            "path": "translations",
            "query": {
                "bool": {
                    "must": [
                        {"multi_match": {"fields": ["translations.name"], "query": "Idefix"}},
                        {"match": {"translations.locale": "fr"}},
                    ]
                }
            },
        }
    }


def test_should_bool():
    q = Bool(Mode.SHOULD, (Match("id", 1), Match("id", 2)))
    assert to_dsl(q) == {"bool": {"should": [{"match": {"id": 1}}, {"match": {"id": 2}}]}}


def test_or_filter():
    q = Bool(Mode.OR, (Term("active_locales", "fr"),))
    assert to_dsl(q) == {
        "bool": {"should": [{"term": {"active_locales": "fr"}}], "minimum_should_match": 1}
    }


def test_and_filter_with_negated_terms():
    q = Bool(Mode.AND, (Term("active_locales", "fr", negated=True),))
    assert to_dsl(q) == {
        "bool": {"filter": [{"bool": {"must_not": [{"term": {"active_locales": "fr"}}]}}]}
    }


def test_match_all():
    assert to_dsl(MatchAll()) == {"match_all": {}}


def test_unknown_node_raises():
    with pytest.raises(ValueError):
        to_dsl(QueryFragment())


def test_combine_single_clause_is_unwrapped():
    clause = {"match": {"id": 1}}
    assert combine([clause], Mode.MUST) is clause


def test_combine_many():
    clauses = [{"match": {"id": 1}}, {"match": {"id": 2}}]
    assert combine(clauses, Mode.SHOULD) == {"bool": {"should": clauses}}
    assert combine(clauses, Mode.AND) == {"bool": {"filter": clauses}}
