"""
Tests for style.redundant_condition_parens rule.
"""

from builders import build, node, run_rules, tok
from idiomlint.rules.redundant_condition_parens import RedundantConditionParensRule
from samples import ident, if_padded_parens, if_unwrapped, if_with_parens


class TestRedundantConditionParensRule:
    """Test suite for the RedundantConditionParensRule."""

    def setup_method(self):
        self.rule = RedundantConditionParensRule()

    def test_subscribes_to_conditionals(self):
        assert {"if", "unless", "while", "until", "if_modifier"} <= set(self.rule.meta.kinds)

    def test_flags_parenthesized_if_condition(self):
        source = "if (x > 10)\n  foo\nend\n"
        result = run_rules(source, if_with_parens(source), self.rule)

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.message == "Don't use parentheses around the condition of `if`."
        # The finding covers the parenthesized condition
        assert (finding.start_byte, finding.end_byte) == (3, 11)
        assert result.correction.text == "if x > 10\n  foo\nend\n"

    def test_unparenthesized_condition_is_clean(self):
        source = "if x > 10\n  foo\nend\n"
        assert run_rules(source, if_unwrapped(source), self.rule).findings == ()

    def test_removes_inner_padding(self):
        source = "if ( x )\nend\n"
        result = run_rules(source, if_padded_parens(source), self.rule)
        assert result.correction.text == "if x\nend\n"

    def test_glued_parenthesis_keeps_tokens_apart(self):
        source = "while(x)\nend\n"
        tree = build(source, node(
            "while",
            tok("while"),
            node("parenthesized_statements", tok("("), ident("x"), tok(")"), field="condition"),
            tok("end"),
        ))
        result = run_rules(source, tree, self.rule)

        assert result.findings[0].message == "Don't use parentheses around the condition of `while`."
        assert result.correction.text == "while x\nend\n"

    def test_modifier_form(self):
        source = "foo unless (x)\n"
        tree = build(source, node(
            "unless_modifier",
            ident("foo", "body"),
            tok("unless"),
            node("parenthesized_statements", tok("("), ident("x"), tok(")"), field="condition"),
        ))
        result = run_rules(source, tree, self.rule)
        assert result.correction.text == "foo unless x\n"

    def test_assignment_in_condition_is_allowed(self):
        source = "if (x = next_value)\nend\n"
        tree = build(source, node(
            "if",
            tok("if"),
            node("parenthesized_statements",
                 tok("("),
                 node("assignment", ident("x", "left"), tok("="), ident("next_value", "right")),
                 tok(")"),
                 field="condition"),
            tok("end"),
        ))
        assert run_rules(source, tree, self.rule).findings == ()

    def test_multiple_statements_are_not_flagged(self):
        source = "if (a; b)\nend\n"
        tree = build(source, node(
            "if",
            tok("if"),
            node("parenthesized_statements", tok("("), ident("a"), tok(";"), ident("b"), tok(")"),
                 field="condition"),
            tok("end"),
        ))
        assert run_rules(source, tree, self.rule).findings == ()
