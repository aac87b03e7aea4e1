"""
Static checks for placeholder templates.

Flags constructs that render, but probably not the way the author meant:

* generic ``?`` placeholders (a typed ``?d``/``?f``/``?#`` is stricter),
* a conditional block that is not at the end (it is moved there on render),
* ``{...}`` blocks after the first one (rendered literally),
* nested or unbalanced braces,
* ``?`` glued to other text, e.g. ``IN (?)``, which is not a placeholder.

Usage::

    warnings = check_template_safety(template)
    # [{"kind": "generic", "offset": 31, "line": 1, "message": "..."}]
"""

from typing import Any

from pydbquery.sql.builder import compile_template
from pydbquery.sql.conditional import split_fragment
from pydbquery.sql.lexer import PlaceholderKind


def _warning(template: str, kind: str, offset: int, message: str) -> dict[str, Any]:
    return {
        "kind": kind,
        "offset": offset,
        "line": template.count("\n", 0, offset) + 1,
        "message": message,
    }


def _brace_warnings(template: str) -> list[dict[str, Any]]:
    warnings: list[dict[str, Any]] = []
    depth = 0
    opened_at = -1
    for i, ch in enumerate(template):
        if ch == "{":
            depth += 1
            if depth == 1:
                opened_at = i
            elif depth == 2:
                warnings.append(
                    _warning(template, "nested_block", i, "Nested '{' is not supported")
                )
        elif ch == "}":
            if depth == 0:
                warnings.append(
                    _warning(template, "unbalanced", i, "'}' without a matching '{'")
                )
                continue
            depth -= 1
    if depth > 0:
        warnings.append(_warning(template, "unbalanced", opened_at, "'{' is never closed"))
    return warnings


def check_template_safety(template: str) -> list[dict[str, Any]]:
    """Analyse *template* and return a list of warnings, ordered by offset.

    An empty list means no issues detected.
    """
    warnings: list[dict[str, Any]] = []

    placeholder_starts: set[int] = set()
    for token in compile_template(template).placeholders:
        placeholder_starts.add(token.start)
        if token.kind is PlaceholderKind.GENERIC:
            warnings.append(
                _warning(
                    template,
                    "generic",
                    token.start,
                    "Generic '?' placeholder: consider ?d, ?f or ?# for stricter typing",
                )
            )

    for i, ch in enumerate(template):
        if ch == "?" and i not in placeholder_starts:
            warnings.append(
                _warning(
                    template,
                    "literal_question_mark",
                    i,
                    "'?' is not followed by whitespace or d/f/a/# and stays literal text",
                )
            )

    _, fragment = split_fragment(template)
    if fragment is not None:
        tail = template[fragment.end :]
        if tail.strip():
            warnings.append(
                _warning(
                    template,
                    "relocated",
                    fragment.start,
                    "Conditional block is not at the end; it is rendered after the rest of the query",
                )
            )
        _, extra = split_fragment(tail)
        if extra is not None:
            warnings.append(
                _warning(
                    template,
                    "extra_block",
                    fragment.end + extra.start,
                    "Only the first {...} block is conditional; this one is rendered literally",
                )
            )

    warnings.extend(_brace_warnings(template))
    warnings.sort(key=lambda w: w["offset"])
    return warnings
