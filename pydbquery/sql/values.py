"""
Argument classification.

Every argument is tagged once at the call boundary (null, bool, int, float,
string, sequence, mapping, skip, other); placeholder kinds accept a fixed set
of tags. Also home of the skip marker used to drop the conditional block.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any, Final

from pydbquery.sql.lexer import PlaceholderKind


class ValueTag(str, Enum):
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SKIP = "skip"
    OTHER = "other"


class _SkipMarker:
    """Sentinel requesting omission of the conditional block. Always falsy."""

    _instance: _SkipMarker | None = None

    def __new__(cls) -> _SkipMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "SKIP"

    def __reduce__(self) -> str:
        return "SKIP"


SKIP: Final = _SkipMarker()


def skip(condition: Any = False, value: Any = None) -> Any:
    """
    Return *value* when *condition* holds and *value* is not ``None``/``''``,
    otherwise the skip marker.

    ``skip()`` always yields the marker. Typical use inside an argument list::

        build_query("SELECT * FROM t {WHERE age > ?d}", [skip(age is not None, age)])
    """
    if not condition or value is None:
        return SKIP
    if isinstance(value, str) and value == "":
        return SKIP
    return value


def is_skip(value: Any) -> bool:
    return value is SKIP


def classify(value: Any) -> ValueTag:
    if value is SKIP:
        return ValueTag.SKIP
    if value is None:
        return ValueTag.NULL
    if isinstance(value, bool):
        return ValueTag.BOOL
    if isinstance(value, numbers.Integral):
        return ValueTag.INT
    # Decimal is what pymysql/psycopg return for DECIMAL/NUMERIC columns
    if isinstance(value, (numbers.Real, Decimal)):
        return ValueTag.FLOAT
    if isinstance(value, str):
        return ValueTag.STRING
    if isinstance(value, Mapping):
        return ValueTag.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ValueTag.SEQUENCE
    return ValueTag.OTHER


ACCEPTED_TAGS: dict[PlaceholderKind, frozenset[ValueTag]] = {
    PlaceholderKind.GENERIC: frozenset(
        {ValueTag.STRING, ValueTag.INT, ValueTag.FLOAT, ValueTag.BOOL, ValueTag.NULL}
    ),
    PlaceholderKind.ARRAY: frozenset({ValueTag.SEQUENCE, ValueTag.MAPPING}),
    # strings must additionally be numeric, checked by the formatter
    PlaceholderKind.INTEGER: frozenset(
        {ValueTag.INT, ValueTag.BOOL, ValueTag.NULL, ValueTag.STRING}
    ),
    PlaceholderKind.FLOAT: frozenset({ValueTag.FLOAT, ValueTag.NULL}),
    PlaceholderKind.IDENTIFIER: frozenset({ValueTag.STRING, ValueTag.SEQUENCE}),
}


def accepts(kind: PlaceholderKind, tag: ValueTag) -> bool:
    """True if *kind* takes a value tagged *tag*. The skip marker is accepted by every kind."""
    return tag is ValueTag.SKIP or tag in ACCEPTED_TAGS[kind]
