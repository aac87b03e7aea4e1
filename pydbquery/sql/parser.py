"""
Parse placeholder kinds from a template.

Thin wrapper over ``QueryBuilder.parse_placeholders`` (no escaping involved).
"""

from pydbquery.sql.builder import compile_template


def parse_placeholders(template: str) -> list[str]:
    """
    Return placeholder kinds (``?``, ``?d``, ``?f``, ``?a``, ``?#``) in the order
    arguments are consumed: main body first, then the conditional block.

    The length of the result is the number of arguments ``build`` expects.
    """
    return [p.kind.value for p in compile_template(template).placeholders]
