"""
Tests for style.nil_comparison rule.
"""

from builders import build, node, run_rules, tok
from idiomlint.rules.nil_comparison import NilComparisonRule
from samples import ident


def nil_check(source, left, operator="=="):
    return build(source, node("binary", left, tok(operator, field="operator"),
                              tok("nil", "nil", field="right")))


class TestNilComparisonRule:
    """Test suite for the NilComparisonRule."""

    def setup_method(self):
        self.rule = NilComparisonRule()

    def test_flags_equality_with_nil(self):
        source = "x == nil\n"
        result = run_rules(source, nil_check(source, ident("x", "left")), self.rule)

        assert len(result.findings) == 1
        assert result.findings[0].message == "Prefer the use of the `nil?` predicate."
        assert result.findings[0].severity == "info"
        assert result.correction.text == "x.nil?\n"

    def test_inequality_is_ignored(self):
        source = "x != nil\n"
        assert run_rules(source, nil_check(source, ident("x", "left"), "!="), self.rule).findings == ()

    def test_compound_receiver_has_no_edit(self):
        source = "a + b == nil\n"
        left = node("binary", ident("a", "left"), tok("+", field="operator"), ident("b", "right"),
                    field="left")
        result = run_rules(source, nil_check(source, left), self.rule)

        assert len(result.findings) == 1
        assert not result.findings[0].autofix
        assert result.correction.text == source
