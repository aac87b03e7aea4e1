"""
Argument cursor: positional arguments consumed left to right, once each.

A cursor belongs to a single build call; the builder itself keeps no
consumption state, so one ``QueryBuilder`` can be shared across threads.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydbquery.sql.errors import InsufficientArguments
from pydbquery.sql.lexer import Placeholder


class ArgumentCursor:
    def __init__(self, args: Iterable[Any] = ()) -> None:
        self._args: tuple[Any, ...] = tuple(args)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._args)

    def __repr__(self) -> str:
        return f"ArgumentCursor(consumed={self._pos}, remaining={self.remaining})"

    @property
    def consumed(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._args) - self._pos

    def take(self, placeholder: Placeholder) -> Any:
        """Return the next argument for *placeholder*."""
        if self._pos >= len(self._args):
            raise InsufficientArguments(
                f"Not enough arguments: {len(self._args)} supplied",
                placeholder=placeholder.kind.value,
                offset=placeholder.start,
            )
        value = self._args[self._pos]
        self._pos += 1
        return value

    def rest(self) -> ArgumentCursor:
        """A fresh cursor over the arguments not yet consumed, re-based at 0."""
        return ArgumentCursor(self._args[self._pos :])
