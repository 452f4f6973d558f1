"""
Tests for the traversal engine.
"""

import threading

import pytest

from builders import find
from idiomlint.errors import TraversalCancelled
from idiomlint.registry import Registry
from idiomlint.traversal import Deadline, TokenIndex, walk
from idiomlint.types import Edit, FindingKind, RuleMeta
from samples import if_with_parens, keyword_and


class RecordingRule:
    """Records every node and context it is invoked with."""

    def __init__(self, rule_id, kinds):
        self.meta = RuleMeta(id=rule_id, description=rule_id, kinds=kinds)
        self.seen = []

    def match(self, node, ctx):
        self.seen.append((node.kind, ctx.parent.kind if ctx.parent else None))
        return []


class CrashingRule:
    meta = RuleMeta(id="test.crash", description="always fails", kinds=("binary",))

    def match(self, node, ctx):
        raise ValueError("boom")


class ReportingRule:
    meta = RuleMeta(id="test.report", description="reports binaries", kinds=("binary",),
                    severity="error")

    def match(self, node, ctx):
        yield ctx.report("binary here")


class AutocorrectingRule:
    meta = RuleMeta(id="test.autocorrect", description="edits via autocorrect", kinds=("binary",))

    def match(self, node, ctx):
        yield ctx.report("fixable")

    def autocorrect(self, finding):
        return [Edit(finding.start_byte, finding.start_byte, "!")]


def resolve(*rules):
    registry = Registry()
    for rule in rules:
        registry.register_rule(rule)
    return registry.resolve()


class TestWalk:
    """Test suite for walk()."""

    def test_pre_order_with_parents(self):
        rule = RecordingRule("test.record", ("if", "parenthesized_statements", "binary", "identifier"))
        traversal = walk(if_with_parens(), resolve(rule))

        assert rule.seen == [
            ("if", "program"),
            ("parenthesized_statements", "if"),
            ("binary", "parenthesized_statements"),
            ("identifier", "binary"),
            ("identifier", "then"),
        ]
        assert traversal.nodes_visited == 13
        assert traversal.crashes == 0

    def test_only_subscribed_rules_run(self):
        rule = RecordingRule("test.record", ("while",))
        walk(if_with_parens(), resolve(rule))
        assert rule.seen == []

    def test_report_uses_resolved_severity(self):
        traversal = walk(keyword_and(), resolve(ReportingRule()))
        finding = traversal.findings[0]
        assert finding.rule == "test.report"
        assert finding.severity == "error"
        assert finding.kind is FindingKind.VIOLATION
        assert (finding.start_byte, finding.end_byte) == (0, 7)

    def test_crash_is_isolated(self):
        traversal = walk(keyword_and(), resolve(CrashingRule(), ReportingRule()), file="a.rb")

        assert traversal.crashes == 1
        crash, report = traversal.findings
        assert crash.kind is FindingKind.RULE_CRASHED
        assert crash.rule == "test.crash"
        assert crash.severity == "info"
        assert crash.file == "a.rb"
        assert crash.message == "RuleCrashed: rule 'test.crash' raised ValueError: boom"
        assert report.rule == "test.report"

    def test_autocorrect_hook_fills_edits(self):
        finding = walk(keyword_and(), resolve(AutocorrectingRule())).findings[0]
        assert finding.autofix == (Edit(0, 0, "!"),)

    def test_expired_deadline_cancels(self):
        event = threading.Event()
        event.set()
        with pytest.raises(TraversalCancelled):
            walk(if_with_parens(), resolve(RecordingRule("test.record", ("if",))), Deadline(event=event))

    def test_deadline_without_limit_never_expires(self):
        deadline = Deadline()
        assert not deadline.expired()
        deadline.check()

    def test_zero_timeout_expires(self):
        assert Deadline(0).expired()


class TestNodeContext:
    """Test suite for the context handed to rules."""

    def test_siblings_and_tokens(self):
        contexts = []

        class Probe:
            meta = RuleMeta(id="test.probe", description="probe", kinds=("parenthesized_statements",))

            def match(self, node, ctx):
                contexts.append((
                    ctx.prev_sibling.text,
                    ctx.next_sibling.kind,
                    ctx.preceding_token().text,
                    ctx.following_token().text,
                    [t.text for t in ctx.tokens_between(node.start_byte, node.end_byte)],
                ))
                return []

        walk(if_with_parens(), resolve(Probe()))
        assert contexts == [("if", "then", "if", "foo", ["(", "x", ">", "10", ")"])]


class TestTokenIndex:

    def test_lookups(self):
        tree = if_with_parens()
        index = TokenIndex(tree.tokens)
        binary = find(tree, "binary")

        assert index.preceding(binary).text == "("
        assert index.following(binary).text == ")"
        assert index.preceding(tree.tokens[0]) is None
        assert index.following(tree.tokens[-1]) is None
