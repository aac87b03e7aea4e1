"""Unit tests for sql.safety (static template checks)."""

from pydbquery.sql.safety import check_template_safety


def _kinds(template: str) -> list[str]:
    return [w["kind"] for w in check_template_safety(template)]


class TestCheckTemplateSafety:
    def test_clean_template(self):
        assert check_template_safety("SELECT ?# FROM t WHERE id = ?d {AND a = ?f}") == []

    def test_empty_template(self):
        assert check_template_safety("") == []

    def test_generic_placeholder(self):
        warnings = check_template_safety("SELECT * FROM t WHERE name = ?")
        assert len(warnings) == 1
        assert warnings[0]["kind"] == "generic"
        assert warnings[0]["offset"] == 29
        assert warnings[0]["line"] == 1

    def test_glued_question_mark(self):
        warnings = check_template_safety("SELECT *\nFROM t\nWHERE id IN (?)")
        assert [w["kind"] for w in warnings] == ["literal_question_mark"]
        assert warnings[0]["line"] == 3

    def test_generic_at_block_end_not_glued(self):
        assert _kinds("SELECT 1 {AND b = ?}") == ["generic"]

    def test_relocated_block(self):
        assert _kinds("SELECT * FROM t {WHERE a = ?d} LIMIT 5") == ["relocated"]

    def test_trailing_whitespace_not_relocated(self):
        assert _kinds("SELECT * FROM t {WHERE a = ?d}  \n") == []

    def test_extra_block(self):
        warnings = check_template_safety("SELECT 1 {AND a = ?d}{AND b = ?d}")
        kinds = [w["kind"] for w in warnings]
        assert "extra_block" in kinds
        extra = next(w for w in warnings if w["kind"] == "extra_block")
        assert extra["offset"] == 21

    def test_nested_block(self):
        assert "nested_block" in _kinds("SELECT 1 {AND {a} = ?d}")

    def test_unclosed_brace(self):
        assert _kinds("SELECT 1 {AND a = ?d") == ["unbalanced"]

    def test_stray_closing_brace(self):
        assert _kinds("SELECT 1 } ") == ["unbalanced"]

    def test_sorted_by_offset(self):
        offsets = [w["offset"] for w in check_template_safety("? {x ?d} (?) ?")]
        assert offsets == sorted(offsets)

    def test_message_present(self):
        (warning,) = check_template_safety("a IN (?)")
        assert "literal" in warning["message"]
