# lingosearch/query/values.py
"""Search values accepted by `search_by`, as a closed tagged union."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from lingosearch.errors import UnsupportedValueShape


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class IntegerList:
    values: tuple[int, ...]


@dataclass(frozen=True)
class DateTime:
    value: date


SearchValue = Text | Integer | IntegerList | DateTime


def is_blank(value: Any) -> bool:
    """True for None, False, whitespace-only strings and empty collections."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    return False


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def classify(field: str, value: Any) -> SearchValue:
    """Map a raw criteria value onto its SearchValue variant.

    `None` entries inside a list are dropped; any other non-integer entry
    rejects the whole value.

    Raises:
        UnsupportedValueShape: for floats, booleans, dicts and anything else
            outside the union.
    """
    match value:
        case str():
            return Text(value)
        case date():
            # datetime is a date subclass
            return DateTime(value)
        case list() | tuple():
            values = tuple(v for v in value if v is not None)
            if not all(_is_int(v) for v in values):
                raise UnsupportedValueShape(field, value)
            return IntegerList(values)
        case _ if _is_int(value):
            return Integer(value)
        case _:
            raise UnsupportedValueShape(field, value)
