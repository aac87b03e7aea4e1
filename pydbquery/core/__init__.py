"""
Core: settings and the escaping delegate used by the SQL engine.
"""

from .config import Settings, settings
from .escape import (
    CallableEscaper,
    DefaultEscaper,
    Escaper,
    MySQLEscaper,
    PostgresEscaper,
    escaper_for,
)

__all__ = [
    "Settings",
    "settings",
    "Escaper",
    "DefaultEscaper",
    "MySQLEscaper",
    "PostgresEscaper",
    "CallableEscaper",
    "escaper_for",
]
