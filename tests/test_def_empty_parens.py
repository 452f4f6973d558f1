"""
Tests for style.def_empty_parens rule.
"""

from builders import build, node, run_rules, tok
from idiomlint.rules.def_empty_parens import DefEmptyParensRule
from samples import ident


def method(source, *params, body=None):
    children = [tok("def"), ident("some_method", "name")]
    if params:
        children.append(node("method_parameters", *params, field="parameters"))
    if body is not None:
        children.append(body)
    children.append(tok("end"))
    return build(source, node("method", *children))


class TestDefEmptyParensRule:
    """Test suite for the DefEmptyParensRule."""

    def setup_method(self):
        self.rule = DefEmptyParensRule()

    def test_flags_empty_parentheses(self):
        source = "def some_method()\n  1\nend\n"
        tree = method(source, tok("("), tok(")"), body=node("body_statement", tok("1", "integer"), field="body"))
        result = run_rules(source, tree, self.rule)

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert (finding.start_byte, finding.end_byte) == (15, 17)
        assert result.correction.text == "def some_method\n  1\nend\n"

    def test_no_parentheses_is_clean(self):
        source = "def some_method\nend\n"
        assert run_rules(source, method(source), self.rule).findings == ()

    def test_parameters_are_clean(self):
        source = "def some_method(a)\nend\n"
        assert run_rules(source, method(source, tok("("), ident("a"), tok(")")), self.rule).findings == ()

    def test_endless_method_keeps_parentheses(self):
        source = "def some_method() = 1\n"
        tree = build(source, node(
            "method",
            tok("def"),
            ident("some_method", "name"),
            node("method_parameters", tok("("), tok(")"), field="parameters"),
            tok("="),
            tok("1", "integer", field="body"),
        ))
        assert run_rules(source, tree, self.rule).findings == ()

    def test_body_on_the_same_line_is_reported_without_edit(self):
        # Dropping the parentheses would make `bar` a parameter
        source = "def some_method() bar end\n"
        tree = method(source, tok("("), tok(")"), body=node("body_statement", ident("bar"), field="body"))
        result = run_rules(source, tree, self.rule)

        assert len(result.findings) == 1
        assert not result.findings[0].autofix
        assert result.correction.text == source

    def test_semicolon_after_parentheses(self):
        source = "def some_method(); 1; end\n"
        tree = build(source, node(
            "method",
            tok("def"),
            ident("some_method", "name"),
            node("method_parameters", tok("("), tok(")"), field="parameters"),
            tok(";"),
            node("body_statement", tok("1", "integer"), tok(";"), field="body"),
            tok("end"),
        ))
        result = run_rules(source, tree, self.rule)
        assert result.correction.text == "def some_method; 1; end\n"
