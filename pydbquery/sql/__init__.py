"""
SQL placeholder engine.

Exports: QueryBuilder, build_query, skip, SKIP, parse_placeholders,
check_template_safety and the error classes.
"""

from pydbquery.sql.builder import QueryBuilder, build_query, clear_template_cache
from pydbquery.sql.errors import (
    InsufficientArguments,
    InvalidArgumentType,
    QueryBuildError,
    UnrepresentableValue,
    UnusedArguments,
)
from pydbquery.sql.lexer import PlaceholderKind
from pydbquery.sql.parser import parse_placeholders
from pydbquery.sql.safety import check_template_safety
from pydbquery.sql.values import SKIP, skip

__all__ = [
    "QueryBuilder",
    "build_query",
    "clear_template_cache",
    "skip",
    "SKIP",
    "PlaceholderKind",
    "parse_placeholders",
    "check_template_safety",
    "QueryBuildError",
    "InvalidArgumentType",
    "InsufficientArguments",
    "UnrepresentableValue",
    "UnusedArguments",
]
