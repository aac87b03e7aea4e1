"""
Library settings (pydantic-settings).

Values come from the environment (``PYDBQUERY_*``) or an optional ``.env`` file.
``QueryBuilder`` reads them at construction time and accepts per-instance overrides.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

IdentifierQuote = Literal["`", '"', "["]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PYDBQUERY_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # "[" quotes identifiers as [name] (SQL Server style)
    IDENTIFIER_QUOTE: IdentifierQuote = "`"

    # Legacy behaviour: emit the text ``skip`` for values no rule can format
    UNREPRESENTABLE_AS_SKIP: bool = False

    # Compiled (lexed) template LRU size; 0 disables the cache
    TEMPLATE_CACHE_SIZE: int = 512

    STRICT_ARGUMENT_COUNT: bool = False


settings = Settings()
