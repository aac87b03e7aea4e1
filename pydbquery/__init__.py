"""
pydbquery - render SQL from ``?``-placeholder templates

    >>> from pydbquery import build_query, skip
    >>> build_query("SELECT * FROM users WHERE id = ?d {AND block = ?d}", [5, skip()])
    'SELECT * FROM users WHERE id = 5'

Placeholders: ``?`` ``?d`` ``?f`` ``?a`` ``?#``; one optional ``{...}`` block is
dropped when a value in it is the skip marker or renders falsy.
"""

from pydbquery.core import Escaper, escaper_for, settings
from pydbquery.sql import (
    SKIP,
    InsufficientArguments,
    InvalidArgumentType,
    PlaceholderKind,
    QueryBuilder,
    QueryBuildError,
    UnrepresentableValue,
    UnusedArguments,
    build_query,
    check_template_safety,
    parse_placeholders,
    skip,
)

__version__ = "0.1.0"
__all__ = [
    "QueryBuilder",
    "build_query",
    "skip",
    "SKIP",
    "PlaceholderKind",
    "parse_placeholders",
    "check_template_safety",
    "Escaper",
    "escaper_for",
    "settings",
    "QueryBuildError",
    "InvalidArgumentType",
    "InsufficientArguments",
    "UnrepresentableValue",
    "UnusedArguments",
]
