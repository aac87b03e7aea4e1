"""
Escaping delegate: make raw text safe inside a single-quoted SQL literal.

The engine never talks to a database; it only asks the active connection to
escape string values. pymysql (MySQL) and psycopg (PostgreSQL) connections are
supported directly; without a connection the pymysql converter is used.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

import psycopg
import pymysql
from psycopg.pq import Escaping
from pymysql.converters import escape_string


@runtime_checkable
class Escaper(Protocol):
    """Anything that can escape raw text for a quoted SQL literal."""

    def escape_literal(self, raw: str) -> str: ...


class DefaultEscaper:
    """MySQL-compatible escaping without a live connection."""

    def escape_literal(self, raw: str) -> str:
        return escape_string(raw)

    def __repr__(self) -> str:
        return "DefaultEscaper()"


class MySQLEscaper:
    """Delegates to ``pymysql`` ``Connection.escape_string``.

    The connection knows the server's ``NO_BACKSLASH_ESCAPES`` mode, so this is
    preferred over :class:`DefaultEscaper` whenever a connection is available.
    """

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    def escape_literal(self, raw: str) -> str:
        return self._conn.escape_string(raw)

    def __repr__(self) -> str:
        return f"MySQLEscaper({self._conn!r})"


class PostgresEscaper:
    """Delegates to libpq ``PQescapeStringConn`` on a ``psycopg`` connection."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    def escape_literal(self, raw: str) -> str:
        encoding = self._conn.info.encoding
        escaped = Escaping(self._conn.pgconn).escape_string(raw.encode(encoding))
        return escaped.decode(encoding)

    def __repr__(self) -> str:
        return f"PostgresEscaper({self._conn!r})"


class CallableEscaper:
    """Wrap a plain ``str -> str`` function."""

    def __init__(self, fn: Callable[[str], str]) -> None:
        self._fn = fn

    def escape_literal(self, raw: str) -> str:
        return self._fn(raw)

    def __repr__(self) -> str:
        return f"CallableEscaper({self._fn!r})"


def escaper_for(target: Any = None) -> Escaper:
    """
    Resolve *target* into an :class:`Escaper`.

    - ``None`` -> :class:`DefaultEscaper`
    - an ``Escaper`` -> itself
    - a pymysql connection, or any object with ``escape_string`` -> :class:`MySQLEscaper`
    - a psycopg connection -> :class:`PostgresEscaper`
    - a callable -> :class:`CallableEscaper`
    """
    if target is None:
        return DefaultEscaper()
    if isinstance(target, Escaper):
        return target
    if isinstance(target, psycopg.Connection):
        return PostgresEscaper(target)
    if isinstance(target, pymysql.connections.Connection):
        return MySQLEscaper(target)
    if callable(getattr(target, "escape_string", None)):
        return MySQLEscaper(target)
    if callable(target):
        return CallableEscaper(target)
    raise ValueError(
        f"Cannot escape literals with {type(target).__name__}: "
        "pass a pymysql/psycopg connection, an Escaper or a callable"
    )
