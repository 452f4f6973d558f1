"""
Tests for style.scope_resolution_call rule.
"""

from builders import build, node, run_rules, tok
from idiomlint.rules.scope_resolution_call import ScopeResolutionCallRule
from samples import dot_call, ident, scope_call


class TestScopeResolutionCallRule:
    """Test suite for the ScopeResolutionCallRule."""

    def setup_method(self):
        self.rule = ScopeResolutionCallRule()

    def test_rule_metadata(self):
        assert self.rule.meta.id == "style.scope_resolution_call"
        assert self.rule.meta.kinds == ("call",)
        assert self.rule.meta.severity == "warning"

    def test_flags_double_colon_method_call(self):
        source = "SomeClass::some_method\n"
        result = run_rules(source, scope_call(source), self.rule)

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.rule == "style.scope_resolution_call"
        assert finding.message == (
            "Do not use `::` for method calls; use `SomeClass.some_method` instead."
        )
        assert (finding.start_line, finding.end_line) == (1, 1)
        assert result.correction.text == "SomeClass.some_method\n"

    def test_dot_call_is_clean(self):
        source = "SomeClass.some_method\n"
        result = run_rules(source, dot_call(source), self.rule)
        assert result.findings == ()

    def test_constant_lookup_is_not_a_method_call(self):
        source = "Foo::Bar()\n"
        tree = build(source, node(
            "call",
            tok("Foo", "constant", field="receiver"),
            tok("::", field="operator"),
            tok("Bar", "constant", field="method"),
            node("argument_list", tok("("), tok(")"), field="arguments"),
        ))
        result = run_rules(source, tree, self.rule)
        assert result.findings == ()

    def test_lowercase_method_with_arguments(self):
        source = "Foo::bar(1)\n"
        tree = build(source, node(
            "call",
            tok("Foo", "constant", field="receiver"),
            tok("::", field="operator"),
            ident("bar", "method"),
            node("argument_list", tok("("), tok("1", "integer"), tok(")"), field="arguments"),
        ))
        result = run_rules(source, tree, self.rule)
        assert len(result.findings) == 1
        assert result.correction.text == "Foo.bar(1)\n"

    def test_nested_constant_receiver_in_message(self):
        source = "Foo::Bar::baz\n"
        tree = build(source, node(
            "call",
            node("scope_resolution",
                 tok("Foo", "constant", field="scope"),
                 tok("::"),
                 tok("Bar", "constant", field="name"),
                 field="receiver"),
            tok("::", field="operator"),
            ident("baz", "method"),
        ))
        result = run_rules(source, tree, self.rule)

        assert len(result.findings) == 1
        assert result.findings[0].message == (
            "Do not use `::` for method calls; use `Foo::Bar.baz` instead."
        )
        assert result.correction.text == "Foo::Bar.baz\n"
