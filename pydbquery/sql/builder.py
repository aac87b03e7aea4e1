"""
Query builder: template + positional arguments -> final SQL string.

    SELECT name FROM users WHERE id = ?d {AND age > ?d}

Main-body placeholders take arguments first, then the conditional block takes
the rest. The block is appended after the rendered body (wherever it appeared
in the template) unless it signals a skip; the result is trimmed.

Performance: lexed templates are cached in an LRU dict keyed by template hash,
so repeated builds of the same template skip scanning.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from pydbquery.core.config import IdentifierQuote, settings
from pydbquery.core.escape import Escaper, escaper_for
from pydbquery.sql.arguments import ArgumentCursor
from pydbquery.sql.conditional import Fragment, render_fragment, split_fragment
from pydbquery.sql.errors import UnusedArguments
from pydbquery.sql.formatter import ValueFormatter
from pydbquery.sql.lexer import Placeholder, Text, Token, tokenize
from pydbquery.sql.values import skip

_log = logging.getLogger(__name__)

_template_cache: OrderedDict[str, CompiledTemplate] = OrderedDict()
_cache_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    body: tuple[Token, ...]
    fragment: Fragment | None
    fragment_tokens: tuple[Token, ...]

    @property
    def placeholders(self) -> list[Placeholder]:
        """All placeholders in consumption order: body first, then the block."""
        return [t for t in self.body + self.fragment_tokens if isinstance(t, Placeholder)]


def compile_template(template: str) -> CompiledTemplate:
    """Cut out the conditional block and lex both parts.

    Token offsets always refer to the original template.
    """
    body, fragment = split_fragment(template)
    body_tokens = tokenize(body)
    if fragment is None:
        return CompiledTemplate(body_tokens, None, ())

    width = fragment.end - fragment.start
    body_tokens = tuple(
        replace(t, start=t.start + width) if t.start >= fragment.start else t
        for t in body_tokens
    )
    return CompiledTemplate(body_tokens, fragment, tokenize(fragment.text, fragment.inner_start))


def _compile_cached(template: str, max_size: int) -> CompiledTemplate:
    """Return a compiled template from cache or compile & cache it."""
    if max_size <= 0:
        return compile_template(template)
    key = hashlib.md5(template.encode(), usedforsecurity=False).hexdigest()
    with _cache_lock:
        compiled = _template_cache.get(key)
        if compiled is not None:
            _template_cache.move_to_end(key)
            return compiled
    compiled = compile_template(template)
    with _cache_lock:
        _template_cache[key] = compiled
        while len(_template_cache) > max_size:
            _template_cache.popitem(last=False)
    return compiled


def clear_template_cache() -> None:
    with _cache_lock:
        _template_cache.clear()


class QueryBuilder:
    """
    Renders placeholder templates into SQL text.

    *connection* supplies string escaping: a pymysql or psycopg connection, an
    ``Escaper``, or a ``str -> str`` callable. Without one, connection-less
    MySQL escaping is used. Keyword options override ``settings``.

    The builder holds no per-call state and can be shared.
    """

    def __init__(
        self,
        connection: Any = None,
        *,
        identifier_quote: IdentifierQuote | None = None,
        unrepresentable_as_skip: bool | None = None,
        strict_argument_count: bool | None = None,
        cache_size: int | None = None,
    ) -> None:
        self.escaper: Escaper = escaper_for(connection)
        self.identifier_quote: IdentifierQuote = identifier_quote or settings.IDENTIFIER_QUOTE
        self.unrepresentable_as_skip = (
            settings.UNREPRESENTABLE_AS_SKIP
            if unrepresentable_as_skip is None
            else unrepresentable_as_skip
        )
        self.strict_argument_count = (
            settings.STRICT_ARGUMENT_COUNT
            if strict_argument_count is None
            else strict_argument_count
        )
        self.cache_size = settings.TEMPLATE_CACHE_SIZE if cache_size is None else cache_size
        self._formatter = ValueFormatter(
            self.escaper,
            identifier_quote=self.identifier_quote,
            unrepresentable_as_skip=self.unrepresentable_as_skip,
        )

    skip = staticmethod(skip)

    def __repr__(self) -> str:
        return f"QueryBuilder(escaper={self.escaper!r}, identifier_quote={self.identifier_quote!r})"

    def compile(self, template: str) -> CompiledTemplate:
        return _compile_cached(template, self.cache_size)

    def build(self, template: str, args: Iterable[Any] = ()) -> str:
        """Render *template* with positional *args* to a final SQL string."""
        if isinstance(args, (str, bytes)):
            raise TypeError("args must be a list of values, not a string")
        args = tuple(args)
        compiled = self.compile(template)
        placeholders = compiled.placeholders
        if not placeholders:
            return template.strip()

        if len(args) > len(placeholders):
            _log.debug(
                "%d unused argument(s) for %d placeholder(s)",
                len(args) - len(placeholders),
                len(placeholders),
            )
            if self.strict_argument_count:
                raise UnusedArguments(
                    f"{len(args)} arguments supplied for {len(placeholders)} placeholders"
                )

        cursor = ArgumentCursor(args)
        sql = self._render_body(compiled.body, cursor)
        if compiled.fragment is not None:
            text, keep = render_fragment(compiled.fragment_tokens, cursor.rest(), self._formatter)
            if keep:
                sql += text
        return sql.strip()

    def parse_placeholders(self, template: str) -> list[str]:
        """Placeholder kinds in the order arguments are consumed."""
        return [p.kind.value for p in self.compile(template).placeholders]

    def _render_body(self, tokens: tuple[Token, ...], cursor: ArgumentCursor) -> str:
        parts: list[str] = []
        for token in tokens:
            if isinstance(token, Text):
                parts.append(token.text)
            else:
                parts.append(self._formatter.format(cursor.take(token), token.kind, token.start))
        return "".join(parts)


_DEFAULT_BUILDER: QueryBuilder | None = None


def _get_default_builder() -> QueryBuilder:
    global _DEFAULT_BUILDER
    if _DEFAULT_BUILDER is None:
        _DEFAULT_BUILDER = QueryBuilder()
    return _DEFAULT_BUILDER


def build_query(template: str, args: Iterable[Any] = (), connection: Any = None) -> str:
    """Build with a throwaway builder for *connection*, or the shared default one."""
    builder = _get_default_builder() if connection is None else QueryBuilder(connection)
    return builder.build(template, args)
