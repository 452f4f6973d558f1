"""
Tests for style.not_keyword rule.
"""

from builders import build, node, run_rules, tok
from idiomlint.rules.not_keyword import NotKeywordRule
from samples import ident


class TestNotKeywordRule:
    """Test suite for the NotKeywordRule."""

    def setup_method(self):
        self.rule = NotKeywordRule()

    def test_simple_operand(self):
        source = "not x\n"
        tree = build(source, node("unary", tok("not", field="operator"), ident("x", "operand")))
        result = run_rules(source, tree, self.rule)

        assert result.findings[0].message == "Use `!` instead of `not`."
        assert result.correction.text == "!x\n"

    def test_compound_operand_is_wrapped(self):
        source = "not a == b\n"
        tree = build(source, node(
            "unary",
            tok("not", field="operator"),
            node("binary", ident("a", "left"), tok("==", field="operator"), ident("b", "right"),
                 field="operand"),
        ))
        result = run_rules(source, tree, self.rule)
        assert result.correction.text == "!(a == b)\n"

    def test_bang_is_clean(self):
        source = "!x\n"
        tree = build(source, node("unary", tok("!", field="operator"), ident("x", "operand")))
        assert run_rules(source, tree, self.rule).findings == ()
