"""Unit tests for core.config (environment-driven settings)."""

import pytest
from pydantic import ValidationError

from pydbquery.core.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PYDBQUERY_IDENTIFIER_QUOTE",
        "PYDBQUERY_UNREPRESENTABLE_AS_SKIP",
        "PYDBQUERY_TEMPLATE_CACHE_SIZE",
        "PYDBQUERY_STRICT_ARGUMENT_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.IDENTIFIER_QUOTE == "`"
    assert s.UNREPRESENTABLE_AS_SKIP is False
    assert s.TEMPLATE_CACHE_SIZE == 512
    assert s.STRICT_ARGUMENT_COUNT is False


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYDBQUERY_IDENTIFIER_QUOTE", '"')
    monkeypatch.setenv("PYDBQUERY_UNREPRESENTABLE_AS_SKIP", "true")
    monkeypatch.setenv("PYDBQUERY_TEMPLATE_CACHE_SIZE", "0")
    s = Settings(_env_file=None)
    assert s.IDENTIFIER_QUOTE == '"'
    assert s.UNREPRESENTABLE_AS_SKIP is True
    assert s.TEMPLATE_CACHE_SIZE == 0


def test_empty_env_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYDBQUERY_IDENTIFIER_QUOTE", "")
    assert Settings(_env_file=None).IDENTIFIER_QUOTE == "`"


def test_invalid_quote(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYDBQUERY_IDENTIFIER_QUOTE", "'")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
