"""
Placeholder lexer.

Splits a template into literal text spans and placeholder tokens, left to right.
Recognised placeholders: ``?d`` ``?f`` ``?a`` ``?#`` and a bare ``?`` followed by
whitespace or the end of the text. Any other ``?`` is literal text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlaceholderKind(str, Enum):
    GENERIC = "?"
    INTEGER = "?d"
    FLOAT = "?f"
    ARRAY = "?a"
    IDENTIFIER = "?#"

    def __str__(self) -> str:
        return self.value


_TYPED_SUFFIXES = {
    "d": PlaceholderKind.INTEGER,
    "f": PlaceholderKind.FLOAT,
    "a": PlaceholderKind.ARRAY,
    "#": PlaceholderKind.IDENTIFIER,
}


@dataclass(frozen=True, slots=True)
class Text:
    text: str
    start: int


@dataclass(frozen=True, slots=True)
class Placeholder:
    kind: PlaceholderKind
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.kind.value)


Token = Text | Placeholder


def tokenize(source: str, offset: int = 0) -> tuple[Token, ...]:
    """
    Lex *source* into ``Text`` and ``Placeholder`` tokens.

    *offset* is added to every position so tokens of a fragment can report
    their location in the full template. Adjacent literal characters are merged.
    """
    tokens: list[Token] = []
    text_start = 0
    i = 0
    length = len(source)

    while i < length:
        if source[i] != "?":
            i += 1
            continue

        nxt = source[i + 1] if i + 1 < length else ""
        if nxt in _TYPED_SUFFIXES:
            kind = _TYPED_SUFFIXES[nxt]
        elif nxt == "" or nxt.isspace():
            kind = PlaceholderKind.GENERIC
        else:
            i += 1
            continue

        if i > text_start:
            tokens.append(Text(source[text_start:i], offset + text_start))
        tokens.append(Placeholder(kind, offset + i))
        i += len(kind.value)
        text_start = i

    if text_start < length:
        tokens.append(Text(source[text_start:], offset + text_start))
    return tuple(tokens)


def scan_placeholders(source: str, offset: int = 0) -> list[Placeholder]:
    """Placeholders of *source* in order; empty list when there are none."""
    return [t for t in tokenize(source, offset) if isinstance(t, Placeholder)]
