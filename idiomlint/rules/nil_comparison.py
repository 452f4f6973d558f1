"""Rule: style.nil_comparison

Don't do explicit non-nil checks against ``nil`` with ``==``; use the
predicate instead.

    if x == nil      # bad
    if x.nil?        # good
"""

from typing import Iterator

from idiomlint.matchers import is_simple_operand, operator
from idiomlint.types import Edit, Finding, RuleMeta


class NilComparisonRule:
    """Flag ``expr == nil`` comparisons."""

    meta = RuleMeta(
        id="style.nil_comparison",
        description="Prefer nil? over == nil",
        kinds=("binary",),
        severity="info",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        op = operator(node)
        if op is None or op.text != "==":
            return
        left = node.child_by_field("left")
        right = node.child_by_field("right")
        if left is None or right is None or right.kind != "nil":
            return

        autofix = []
        if is_simple_operand(left):
            autofix = [Edit(left.end_byte, node.end_byte, ".nil?")]
        yield ctx.report("Prefer the use of the `nil?` predicate.", autofix=autofix)


RULES = [NilComparisonRule()]
