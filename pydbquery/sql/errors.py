"""
Errors raised while building a query. A failed build never returns partial SQL.
"""

from __future__ import annotations

from typing import Any


class QueryBuildError(ValueError):
    """Base class for all query-building failures."""

    def __init__(
        self,
        message: str,
        *,
        placeholder: str | None = None,
        offset: int | None = None,
    ) -> None:
        if placeholder is not None and offset is not None:
            message = f"{message} (placeholder {placeholder!r} at offset {offset})"
        super().__init__(message)
        self.placeholder = placeholder
        self.offset = offset


class InvalidArgumentType(QueryBuildError):
    """The argument's runtime type is not accepted by its placeholder."""

    def __init__(
        self,
        value: Any,
        placeholder: str,
        *,
        offset: int | None = None,
        reason: str | None = None,
    ) -> None:
        message = reason or f"Invalid argument type {type(value).__name__} for {placeholder}"
        super().__init__(message, placeholder=placeholder, offset=offset)
        self.value = value


class InsufficientArguments(QueryBuildError):
    """More placeholders than arguments."""


class UnrepresentableValue(QueryBuildError):
    """No formatting rule recognises the value (e.g. an opaque object inside ``?a``)."""

    def __init__(self, value: Any, placeholder: str, *, offset: int | None = None) -> None:
        super().__init__(
            f"Cannot render {type(value).__name__} as SQL",
            placeholder=placeholder,
            offset=offset,
        )
        self.value = value


class UnusedArguments(QueryBuildError):
    """Arguments left over after rendering (strict argument-count mode only)."""
