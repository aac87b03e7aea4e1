"""
Value formatter: one argument + its placeholder kind -> SQL text.

Rules per kind:

* ``?``  generic: NULL, bool -> 1/0, int/float -> truncated integer,
  sequence/mapping -> ``?a`` rule, string -> escaped and single-quoted.
* ``?d`` integer literal; numeric strings are truncated toward zero.
* ``?f`` decimal float literal (Decimal rendered exactly), or NULL.
* ``?a`` comma list of generic values, or ```key` = value`` assignments for a mapping.
* ``?#`` quoted identifier, or a comma list of quoted identifiers.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from pydbquery.core.config import IdentifierQuote
from pydbquery.core.escape import Escaper
from pydbquery.sql.errors import InvalidArgumentType, UnrepresentableValue
from pydbquery.sql.lexer import PlaceholderKind
from pydbquery.sql.values import ValueTag, accepts, classify

NULL_LITERAL = "NULL"
UNREPRESENTABLE_TEXT = "skip"

# numeric strings for ?d: at most 20 integer digits (unsigned BIGINT)
_MAX_INTEGER_EXPONENT = 19
# Decimal arguments: same exponent range as a double
_MAX_DECIMAL_EXPONENT = 308

_SKIP_REASON = "Skip marker is only allowed inside the conditional block"

_CLOSING_QUOTE = {"`": "`", '"': '"', "[": "]"}


def quote_identifier(name: str, quote: IdentifierQuote = "`") -> str:
    """Quote *name* as an identifier, doubling any embedded closing quote."""
    closing = _CLOSING_QUOTE[quote]
    return f"{quote}{name.replace(closing, closing * 2)}{closing}"


def _decimal_text(value: float) -> str:
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def _int_text(number: Any, value: Any, kind: PlaceholderKind, offset: int | None) -> str:
    try:
        return str(int(number))
    except ValueError as e:
        # str() refuses ints beyond sys.get_int_max_str_digits()
        raise InvalidArgumentType(
            value, kind.value, offset=offset, reason=f"Integer out of range: {e}"
        ) from e


def _checked_decimal(value: Decimal, kind: PlaceholderKind, offset: int | None) -> Decimal:
    """Reject NaN, infinities and exponents a double could not hold."""
    if not value.is_finite() or abs(value.adjusted()) > _MAX_DECIMAL_EXPONENT:
        raise InvalidArgumentType(
            value, kind.value, offset=offset, reason=f"Decimal out of range: {value!r}"
        )
    return value


class ValueFormatter:
    """Formats arguments for one build; holds the escaper and rendering options."""

    def __init__(
        self,
        escaper: Escaper,
        *,
        identifier_quote: IdentifierQuote = "`",
        unrepresentable_as_skip: bool = False,
    ) -> None:
        self._escaper = escaper
        self._quote = identifier_quote
        self._unrepresentable_as_skip = unrepresentable_as_skip
        self._rules: dict[PlaceholderKind, Callable[[Any, ValueTag, int | None], str]] = {
            PlaceholderKind.GENERIC: self._generic,
            PlaceholderKind.INTEGER: self._integer,
            PlaceholderKind.FLOAT: self._float,
            PlaceholderKind.ARRAY: self._array,
            PlaceholderKind.IDENTIFIER: self._identifier,
        }

    def format(self, value: Any, kind: PlaceholderKind, offset: int | None = None) -> str:
        """
        Render *value* for a *kind* placeholder.

        Raises ``InvalidArgumentType`` when the value's type is not accepted by
        *kind* (the skip marker included: it is never SQL text).
        """
        tag = classify(value)
        if tag is ValueTag.SKIP:
            raise InvalidArgumentType(
                value,
                kind.value,
                offset=offset,
                reason=_SKIP_REASON,
            )
        if not accepts(kind, tag):
            raise InvalidArgumentType(value, kind.value, offset=offset)
        return self._rules[kind](value, tag, offset)

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, self._quote)

    def quote_string(self, value: str) -> str:
        return f"'{self._escaper.escape_literal(value)}'"

    def _unrepresentable(self, value: Any, kind: PlaceholderKind, offset: int | None) -> str:
        if self._unrepresentable_as_skip:
            return UNREPRESENTABLE_TEXT
        raise UnrepresentableValue(value, kind.value, offset=offset)

    def _generic(self, value: Any, tag: ValueTag, offset: int | None) -> str:
        if tag is ValueTag.NULL:
            return NULL_LITERAL
        if tag is ValueTag.BOOL:
            return "1" if value else "0"
        if tag is ValueTag.INT:
            return _int_text(value, value, PlaceholderKind.GENERIC, offset)
        if tag is ValueTag.FLOAT:
            if isinstance(value, Decimal):
                value = _checked_decimal(value, PlaceholderKind.GENERIC, offset)
            elif not math.isfinite(value):
                raise InvalidArgumentType(
                    value, "?", offset=offset, reason=f"Non-finite float {value!r}"
                )
            # fractional part is dropped
            return _int_text(value, value, PlaceholderKind.GENERIC, offset)
        if tag in (ValueTag.SEQUENCE, ValueTag.MAPPING):
            return self._array(value, tag, offset)
        if tag is ValueTag.STRING:
            return self.quote_string(value)
        if tag is ValueTag.SKIP:
            # nested in ?a; never rendered, not even as legacy "skip" text
            raise InvalidArgumentType(value, "?", offset=offset, reason=_SKIP_REASON)
        return self._unrepresentable(value, PlaceholderKind.GENERIC, offset)

    def _integer(self, value: Any, tag: ValueTag, offset: int | None) -> str:
        if tag is ValueTag.NULL:
            return NULL_LITERAL
        if tag is ValueTag.BOOL:
            return "1" if value else "0"
        if tag is ValueTag.STRING:
            try:
                number = Decimal(value.strip())
            except InvalidOperation:
                number = Decimal("NaN")
            if not number.is_finite():
                raise InvalidArgumentType(
                    value, "?d", offset=offset, reason=f"Not a numeric string: {value!r}"
                )
            if number.adjusted() > _MAX_INTEGER_EXPONENT:
                raise InvalidArgumentType(
                    value, "?d", offset=offset, reason=f"Numeric string out of range: {value!r}"
                )
            # truncates toward zero
            return str(int(number))
        return _int_text(value, value, PlaceholderKind.INTEGER, offset)

    def _float(self, value: Any, tag: ValueTag, offset: int | None) -> str:
        if tag is ValueTag.NULL:
            return NULL_LITERAL
        if isinstance(value, Decimal):
            # rendered exactly, no round trip through float
            return format(_checked_decimal(value, PlaceholderKind.FLOAT, offset), "f")
        number = float(value)
        if not math.isfinite(number):
            raise InvalidArgumentType(
                value, "?f", offset=offset, reason=f"Non-finite float {value!r}"
            )
        return _decimal_text(number)

    def _array(self, value: Any, tag: ValueTag, offset: int | None) -> str:
        if tag is ValueTag.MAPPING:
            items: Mapping[Any, Any] = value
            return ", ".join(
                f"{self.quote_identifier(str(k))} = {self._generic(v, classify(v), offset)}"
                for k, v in items.items()
            )
        elements: Sequence[Any] = value
        return ", ".join(self._generic(v, classify(v), offset) for v in elements)

    def _identifier(self, value: Any, tag: ValueTag, offset: int | None) -> str:
        if tag is ValueTag.STRING:
            return self.quote_identifier(value)
        if tag is ValueTag.SEQUENCE:
            names: list[str] = []
            for name in value:
                if not isinstance(name, str):
                    raise InvalidArgumentType(
                        value,
                        "?#",
                        offset=offset,
                        reason=f"Identifier list contains {type(name).__name__}, expected str",
                    )
                names.append(self.quote_identifier(name))
            return ", ".join(names)
        return self._unrepresentable(value, PlaceholderKind.IDENTIFIER, offset)
