"""
Conditional block: the first ``{...}`` span of a template.

The block is cut out of the template, rendered with the arguments left after
the main body, and appended to the end of the result unless one of its values
signals a skip (the skip marker, or a falsy rendering: ``''``, ``0``, ``NULL``).
Only one block per template; braces do not nest.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from pydbquery.sql.arguments import ArgumentCursor
from pydbquery.sql.formatter import NULL_LITERAL, ValueFormatter
from pydbquery.sql.lexer import Placeholder, Text, Token
from pydbquery.sql.values import is_skip

_log = logging.getLogger(__name__)

_BLOCK_PATTERN = re.compile(r"\{([^}]*)\}")


@dataclass(frozen=True, slots=True)
class Fragment:
    """Inner text of the block plus the span of ``{...}`` in the template."""

    text: str
    start: int
    end: int

    @property
    def inner_start(self) -> int:
        return self.start + 1


def split_fragment(template: str) -> tuple[str, Fragment | None]:
    """Return ``(main_body, fragment)``; the body has the ``{...}`` span removed."""
    match = _BLOCK_PATTERN.search(template)
    if match is None:
        return template, None
    body = template[: match.start()] + template[match.end() :]
    return body, Fragment(match.group(1), match.start(), match.end())


def is_skip_signal(text: str) -> bool:
    """True for renderings that drop the block: empty, ``NULL`` or numeric zero."""
    if text in ("", NULL_LITERAL):
        return True
    try:
        return Decimal(text) == 0
    except InvalidOperation:
        return False


def render_fragment(
    tokens: tuple[Token, ...],
    cursor: ArgumentCursor,
    formatter: ValueFormatter,
) -> tuple[str, bool]:
    """
    Render fragment *tokens* consuming arguments from *cursor*.

    Returns ``(text, keep)``. A fragment without placeholders is kept as is; one
    with placeholders but no arguments left is dropped.
    """
    if not any(isinstance(t, Placeholder) for t in tokens):
        return "".join(t.text for t in tokens if isinstance(t, Text)), True
    if cursor.remaining == 0:
        _log.debug("Conditional block dropped: no arguments left")
        return "", False

    parts: list[str] = []
    for token in tokens:
        if isinstance(token, Text):
            parts.append(token.text)
            continue
        value = cursor.take(token)
        if is_skip(value):
            _log.debug("Conditional block dropped: skip marker at offset %d", token.start)
            return "".join(parts), False
        text = formatter.format(value, token.kind, token.start)
        if is_skip_signal(text):
            _log.debug("Conditional block dropped: %r rendered as %r", value, text)
            return "".join(parts), False
        parts.append(text)
    return "".join(parts), True
