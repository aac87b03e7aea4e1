"""Unit tests for sql.lexer (placeholder scanning)."""

from pydbquery.sql.lexer import (
    Placeholder,
    PlaceholderKind,
    Text,
    scan_placeholders,
    tokenize,
)


class TestTokenize:
    def test_no_placeholders(self):
        assert tokenize("SELECT 1") == (Text("SELECT 1", 0),)

    def test_empty(self):
        assert tokenize("") == ()

    def test_typed_placeholders(self):
        tokens = tokenize("a = ?d AND b = ?f")
        assert tokens == (
            Text("a = ", 0),
            Placeholder(PlaceholderKind.INTEGER, 4),
            Text(" AND b = ", 6),
            Placeholder(PlaceholderKind.FLOAT, 15),
        )

    def test_generic_followed_by_space(self):
        tokens = tokenize("name = ? AND x")
        assert tokens[1] == Placeholder(PlaceholderKind.GENERIC, 7)
        assert tokens[2] == Text(" AND x", 8)

    def test_generic_at_end(self):
        assert tokenize("name = ?")[-1] == Placeholder(PlaceholderKind.GENERIC, 7)

    def test_generic_followed_by_newline(self):
        assert tokenize("?\nFROM t")[0] == Placeholder(PlaceholderKind.GENERIC, 0)

    def test_question_mark_glued_is_literal(self):
        assert tokenize("IN (?)") == (Text("IN (?)", 0),)
        assert tokenize("'what?'") == (Text("'what?'", 0),)

    def test_adjacent_placeholders(self):
        tokens = tokenize("?d?f")
        assert [t.kind for t in tokens] == [PlaceholderKind.INTEGER, PlaceholderKind.FLOAT]

    def test_offset(self):
        tokens = tokenize("x ?#", offset=10)
        assert tokens == (Text("x ", 10), Placeholder(PlaceholderKind.IDENTIFIER, 12))

    def test_placeholder_end(self):
        assert Placeholder(PlaceholderKind.ARRAY, 3).end == 5
        assert Placeholder(PlaceholderKind.GENERIC, 3).end == 4

    def test_text_round_trip(self):
        source = "SELECT ?# FROM t WHERE a IN (?a) AND b = ? "
        rebuilt = "".join(
            t.text if isinstance(t, Text) else t.kind.value for t in tokenize(source)
        )
        assert rebuilt == source


class TestScanPlaceholders:
    def test_order(self):
        kinds = [p.kind.value for p in scan_placeholders("?# ?a ?d ?f ? ")]
        assert kinds == ["?#", "?a", "?d", "?f", "?"]

    def test_none(self):
        assert scan_placeholders("SELECT * FROM t") == []

    def test_kind_str(self):
        assert str(PlaceholderKind.IDENTIFIER) == "?#"
